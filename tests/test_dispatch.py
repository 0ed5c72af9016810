"""디스패치 레이어 테스트"""

from types import MappingProxyType
from unittest.mock import AsyncMock

import httpx
import pytest

from dispatch_bot.services.dispatch import (
    DispatchBot,
    DispatchIntent,
    KnowledgeBaseBinding,
    resolve_route,
)
from dispatch_bot.services.errors import RecognitionUnavailable
from dispatch_bot.services.qna import QnAMaker
from dispatch_bot.services.qna.base import QueryResult
from dispatch_bot.services.recognition import LuisRecognizer
from dispatch_bot.settings import KnowledgeBaseDomain

from tests.fixtures import (
    BOT,
    USER,
    StaticQnA,
    StubRecognizer,
    make_activity,
    make_members_added,
    make_recognizer_result,
    make_turn,
)


WEATHER_LUIS_RESULT = {
    "intents": [{"intent": "Sunny"}, {"intent": "Rainy"}],
    "entities": [],
    "connectedServiceResult": {"topScoringIntent": {"intent": "Sunny", "score": 0.9}},
}


class TestDispatchIntent:
    """DispatchIntent Enum 테스트"""

    def test_intent_types_exist(self):
        assert DispatchIntent.HOME_AUTOMATION.value == "home_automation"
        assert DispatchIntent.WEATHER.value == "weather"
        assert DispatchIntent.KNOWLEDGE_BASE.value == "knowledge_base"
        assert DispatchIntent.UNKNOWN.value == "unknown"


class TestResolveRoute:
    """resolve_route() 테스트"""

    def test_luis_intents(self, bindings):
        assert resolve_route("l_HomeAutomation", bindings).intent_type == DispatchIntent.HOME_AUTOMATION
        assert resolve_route("l_Weather", bindings).intent_type == DispatchIntent.WEATHER

    def test_knowledge_base_intent(self, bindings):
        route = resolve_route("q_housing-qna", bindings, score=0.8)
        assert route.intent_type == DispatchIntent.KNOWLEDGE_BASE
        assert route.binding.domain.label == "Housing"
        assert route.score == 0.8

    def test_unknown_intent(self, bindings):
        route = resolve_route("x_unknown", bindings)
        assert route.is_unknown
        assert route.intent_id == "x_unknown"
        assert route.binding is None

    def test_domains_are_configuration(self):
        travel = KnowledgeBaseDomain(key="travel", label="Travel", intent="q_travel-qna")
        bindings = MappingProxyType(
            {travel.intent: KnowledgeBaseBinding(domain=travel, service=StaticQnA())}
        )
        assert resolve_route("q_travel-qna", bindings).intent_type == DispatchIntent.KNOWLEDGE_BASE
        assert resolve_route("q_food-qna", bindings).is_unknown


class TestDispatchBotMessages:
    """DispatchBot 메시지 라우팅 테스트"""

    @pytest.mark.asyncio
    async def test_food_answer_scenario(self, bindings, qna_services, adapter):
        qna_services["food"].results = [QueryResult(answer="Eat vegetables.", score=0.9)]
        recognizer = StubRecognizer(make_recognizer_result({"q_food-qna": 0.95, "None": 0.02}))
        bot = DispatchBot(recognizer, bindings)

        await bot.on_turn(make_turn(make_activity("what should I eat"), adapter))

        assert adapter.texts == ["Eat vegetables."]
        assert recognizer.calls == 1
        assert qna_services["food"].calls == 1
        assert all(service.calls == 0 for key, service in qna_services.items() if key != "food")

    @pytest.mark.asyncio
    async def test_housing_no_answer_scenario(self, bindings, qna_services, adapter):
        bot = DispatchBot(StubRecognizer(make_recognizer_result({"q_housing-qna": 0.8})), bindings)

        await bot.on_turn(make_turn(make_activity("can I break my lease"), adapter))

        assert adapter.texts == ["Sorry, could not find an answer in the Housing Q and A system."]

    @pytest.mark.asyncio
    async def test_weather_scenario(self, bindings, adapter):
        result = make_recognizer_result({"l_Weather": 0.9}, luis_result=WEATHER_LUIS_RESULT)
        bot = DispatchBot(StubRecognizer(result), bindings)

        await bot.on_turn(make_turn(make_activity("is it sunny"), adapter))

        assert len(adapter.texts) == 2
        assert adapter.texts[0] == "ProcessWeather top intent Sunny."
        assert adapter.texts[1].endswith("Sunny\n\nRainy.")

    @pytest.mark.asyncio
    async def test_home_automation_routes_to_home_responder(self, bindings, adapter):
        luis_result = {
            "intents": [{"intent": "l_HomeAutomation"}],
            "entities": [{"entity": "kitchen"}],
            "connectedServiceResult": {"topScoringIntent": {"intent": "TurnOn"}},
        }
        result = make_recognizer_result({"l_HomeAutomation": 0.9}, luis_result=luis_result)
        bot = DispatchBot(StubRecognizer(result), bindings)

        await bot.on_turn(make_turn(make_activity("turn on the kitchen light"), adapter))

        assert adapter.texts == [
            "HomeAutomation top intent TurnOn.",
            "HomeAutomation intents detected: l_HomeAutomation.",
            "HomeAutomation entities were found in the message: kitchen.",
        ]

    @pytest.mark.asyncio
    async def test_unknown_intent_scenario(self, bindings, qna_services, adapter):
        bot = DispatchBot(StubRecognizer(make_recognizer_result({"x_unknown": 0.99})), bindings)
        bot.home_automation_responder.respond = AsyncMock()
        bot.weather_responder.respond = AsyncMock()

        await bot.on_turn(make_turn(make_activity("???"), adapter))

        assert adapter.texts == ["Dispatch unrecognized intent: x_unknown."]
        bot.home_automation_responder.respond.assert_not_called()
        bot.weather_responder.respond.assert_not_called()
        assert all(service.calls == 0 for service in qna_services.values())

    @pytest.mark.asyncio
    async def test_no_intents_is_none(self, bindings, adapter):
        bot = DispatchBot(StubRecognizer(make_recognizer_result({})), bindings)

        await bot.on_turn(make_turn(make_activity("hello"), adapter))

        assert adapter.texts == ["Dispatch unrecognized intent: None."]

    @pytest.mark.asyncio
    async def test_tie_uses_first_declared(self, bindings, qna_services, adapter):
        qna_services["food"].results = [QueryResult(answer="food answer", score=0.9)]
        qna_services["housing"].results = [QueryResult(answer="housing answer", score=0.9)]
        result = make_recognizer_result({"q_housing-qna": 0.6, "q_food-qna": 0.6})
        bot = DispatchBot(StubRecognizer(result), bindings)

        await bot.on_turn(make_turn(make_activity("tie"), adapter))

        assert adapter.texts == ["housing answer"]

    @pytest.mark.asyncio
    async def test_recognition_failure_propagates(self, bindings, adapter):
        recognizer = StubRecognizer(make_recognizer_result({}))
        recognizer.recognize = AsyncMock(side_effect=RecognitionUnavailable("LUIS", "HTTP 401"))
        bot = DispatchBot(recognizer, bindings)

        with pytest.raises(RecognitionUnavailable):
            await bot.on_turn(make_turn(make_activity("hi"), adapter))
        assert adapter.texts == []

    @pytest.mark.asyncio
    async def test_aclose_closes_http_clients(self, bindings):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={}))
        recognizer = LuisRecognizer(
            "app-id", "key", "westus", client=httpx.AsyncClient(transport=transport)
        )
        food = QnAMaker(
            "kb-food", "key", "food.azurewebsites.net",
            client=httpx.AsyncClient(transport=transport),
        )
        domain = bindings["q_food-qna"].domain
        bot = DispatchBot(
            recognizer, MappingProxyType({domain.intent: KnowledgeBaseBinding(domain=domain, service=food)})
        )

        await bot.aclose()

        assert recognizer._client.is_closed
        assert food._client.is_closed

    def test_route_reports_score(self, bot):
        route = bot.route(make_recognizer_result({"l_Weather": 0.4, "l_HomeAutomation": 0.7}))
        assert route.intent_type == DispatchIntent.HOME_AUTOMATION
        assert route.score == 0.7


class TestDispatchBotConversationUpdate:
    """DispatchBot conversationUpdate 처리 테스트"""

    @pytest.mark.asyncio
    async def test_members_added_welcomes_users_only(self, bot, recognizer, adapter):
        bob = USER.model_copy(update={"id": "bob-id", "name": "Bob"})

        await bot.on_turn(make_turn(make_members_added(USER, BOT, bob), adapter))

        assert adapter.texts == [
            "Welcome to Dispatch bot Alice. Type a greeting or a question about the weather to get started.",
            "Welcome to Dispatch bot Bob. Type a greeting or a question about the weather to get started.",
        ]
        assert recognizer.calls == 0

    @pytest.mark.asyncio
    async def test_other_activity_types_ignored(self, bot, recognizer, adapter):
        await bot.on_turn(make_turn(make_activity(None, type="typing"), adapter))

        assert adapter.texts == []
        assert recognizer.calls == 0

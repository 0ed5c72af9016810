"""더미 의도 인식 구현 (로컬 실행/테스트용)"""

from typing import TYPE_CHECKING

from .base import BaseRecognizer, IntentScore, RecognizerResult

if TYPE_CHECKING:
    from dispatch_bot.services.dispatch.turn import TurnContext


# 디스패치 의도별 키워드
DEFAULT_KEYWORDS: dict[str, list[str]] = {
    "l_HomeAutomation": ["light", "lights", "turn on", "turn off", "thermostat"],
    "l_Weather": ["weather", "rain", "sunny", "forecast", "temperature"],
    "q_covid-19-qna": ["covid", "virus", "vaccine", "mask"],
    "q_food-qna": ["food", "eat", "meal", "vegetable"],
    "q_housing-qna": ["housing", "rent", "landlord", "eviction"],
    "q_financial-qna": ["money", "loan", "bill", "unemployment"],
}


class DummyRecognizer(BaseRecognizer):
    """키워드 매칭 기반 더미 의도 인식기

    원본 응답 형식(connectedServiceResult 포함)을 흉내 내므로
    LUIS 없이도 전체 디스패치 흐름을 확인할 수 있습니다.
    """

    def __init__(self, keywords: dict[str, list[str]] | None = None):
        self.keywords = keywords or DEFAULT_KEYWORDS

    async def recognize(self, turn: "TurnContext") -> RecognizerResult:
        text = turn.activity.text or ""
        lowered = text.lower()

        intents: dict[str, IntentScore] = {}
        for intent, words in self.keywords.items():
            hits = sum(1 for word in words if word in lowered)
            intents[intent] = IntentScore(score=min(1.0, 0.45 * hits))
        intents["None"] = IntentScore(score=0.1)

        ranked = sorted(intents.items(), key=lambda item: item[1].score, reverse=True)
        top_name, top_score = ranked[0][0], ranked[0][1].score
        luis_result = {
            "query": text,
            "topScoringIntent": {"intent": top_name, "score": top_score},
            "intents": [{"intent": name, "score": score.score} for name, score in ranked],
            "entities": [],
            "connectedServiceResult": {
                "query": text,
                "topScoringIntent": {"intent": "None", "score": 0.5},
                "intents": [{"intent": "None", "score": 0.5}],
                "entities": [],
            },
        }
        return RecognizerResult(text=text, intents=intents, luis_result=luis_result)

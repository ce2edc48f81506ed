# backend/quiz/classifier.py
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

from backend.core.errors import CatalogError, IncompleteQuizError, InvalidAnswerError
from backend.core.personality import PERSONALITY_GROUPS


@dataclass(frozen=True)
class QuizOption:
    value: str
    label: str
    group: str


@dataclass(frozen=True)
class QuizQuestion:
    id: str
    question: str
    options: List[QuizOption]

    def option(self, value: str) -> QuizOption:
        for o in self.options:
            if o.value == value:
                return o
        raise InvalidAnswerError(f"{self.id}: unknown option {value!r}")


class QuizClassifier:
    """
    Four-group learning-style quiz. Each chosen option votes for one group; the
    group with the most votes wins. On a tie the group listed later in
    PERSONALITY_GROUPS wins.
    """

    def __init__(self, questions: List[QuizQuestion]):
        self.questions = list(questions)
        for q in self.questions:
            for o in q.options:
                if o.group not in PERSONALITY_GROUPS:
                    raise CatalogError(f"{q.id}/{o.value}: unknown group {o.group!r}")

    @classmethod
    def from_json(cls, quiz_json: Dict[str, Any]) -> "QuizClassifier":
        questions = [
            QuizQuestion(
                id=q["id"],
                question=q["question"],
                options=[QuizOption(o["value"], o["label"], o["group"]) for o in q["options"]],
            )
            for q in quiz_json["questions"]
        ]
        return cls(questions)

    def tally(self, answers: Mapping[str, str]) -> Dict[str, int]:
        by_id = {q.id: q for q in self.questions}
        unknown = [qid for qid in answers if qid not in by_id]
        if unknown:
            raise InvalidAnswerError(f"Unknown questions: {', '.join(unknown)}")
        missing = [q.id for q in self.questions if not answers.get(q.id)]
        if missing:
            raise IncompleteQuizError(missing)

        counts = {g: 0 for g in PERSONALITY_GROUPS}
        for qid, value in answers.items():
            counts[by_id[qid].option(value).group] += 1
        return counts

    def classify(self, answers: Mapping[str, str]) -> str:
        counts = self.tally(answers)
        dominant = PERSONALITY_GROUPS[0]
        for g in PERSONALITY_GROUPS[1:]:
            if counts[g] >= counts[dominant]:
                dominant = g
        return dominant

import logging
from typing import List, Dict, Any, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Query, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse, JSONResponse
from pydantic import BaseModel

from backend.config import settings
from backend.core.calculator import build_calculator
from backend.core.engine import EligibilityEngine
from backend.core.errors import (
    IncompleteInputError,
    IncompleteQuizError,
    InvalidAnswerError,
    SubjectSlotError,
)
from backend.core.models import CourseRequirement, MatchResult, MatchStatus, Student
from backend.core.personality import group_for
from backend.core.repositories import JsonCourseRepository
from backend.institutions.loaders import load_quiz, load_universities
from backend.quiz.classifier import QuizClassifier

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Static reference data, loaded once per process
UNIVERSITIES = load_universities(settings.DATA_DIR)
CALCULATOR = build_calculator(settings.DATA_DIR)
ENGINE = EligibilityEngine(JsonCourseRepository.from_data_dir(settings.DATA_DIR))
QUIZ = QuizClassifier.from_json(load_quiz(settings.DATA_DIR))


app = FastAPI(title="Career Canvas")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def root_redirect():
    return RedirectResponse(url="/docs")


# --------- Request models ----------
class SubjectInput(BaseModel):
    name: Optional[str] = None
    # raw form value: number or numeric string
    percentage: Optional[Any] = None


class ApsRequest(BaseModel):
    subjects: List[SubjectInput]


class MatchRequest(BaseModel):
    scores: Dict[str, int] = {}
    subjects: List[str] = []
    personality: Optional[str] = None


class ComputeRequest(BaseModel):
    subjects: List[SubjectInput]
    personality: Optional[str] = None


class ClassifyRequest(BaseModel):
    answers: Dict[str, str]


# --------- Serialization ----------
def course_to_dict(c: CourseRequirement) -> Dict[str, Any]:
    return {
        "institution": c.institution,
        "course_name": c.course_name,
        "required_score": c.required_score,
        "required_subjects": list(c.required_subjects),
        "personality_match": sorted(c.personality_match),
        "duration": c.duration,
        "intake": c.intake,
        "description": c.description,
        "student_life": c.student_life,
    }


def match_to_dict(result: MatchResult, personality: Optional[str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "status": result.status.value,
        "personality": personality,
        "personality_group": group_for(personality),
        "courses": [course_to_dict(c) for c in result.courses],
        "unknown_institutions": list(result.unknown_institutions),
    }
    if result.status is MatchStatus.NO_MATCHES:
        out["alternatives"] = [course_to_dict(c) for c in ENGINE.alternatives(personality)]
    return out


def _compute_scores(subjects: List[SubjectInput]):
    try:
        return CALCULATOR.compute_with_breakdown([(s.name, s.percentage) for s in subjects])
    except (IncompleteInputError, SubjectSlotError) as e:
        raise HTTPException(status_code=400, detail=str(e))


def _match(scores: Dict[str, int], subjects: List[str], personality: Optional[str]) -> Dict[str, Any]:
    personality = (personality or "").strip() or None
    scores = {k.lower().strip(): v for k, v in scores.items()}
    result = ENGINE.match(Student(scores=scores, subjects=subjects, personality=personality))
    return match_to_dict(result, personality)


# --------- Endpoints ----------
@app.get("/institutions")
def institutions() -> List[str]:
    return CALCULATOR.institutions


@app.get("/universities")
def universities() -> List[Dict[str, Any]]:
    return [
        {
            "id": u["id"],
            "name": u["name"],
            "short_name": u.get("short_name", ""),
            "description": u.get("description", ""),
            "campus_tips": u.get("campus_tips", []),
            "scale": u.get("scale"),
        }
        for u in UNIVERSITIES
    ]


@app.get("/courses")
def courses(institution: Optional[str] = Query(None)) -> List[Dict[str, Any]]:
    inst = (institution or "").lower().strip()
    known = {u["id"] for u in UNIVERSITIES}
    if inst and inst not in known:
        raise HTTPException(status_code=404, detail=f"Unknown institution: {institution}")
    return [
        course_to_dict(c)
        for c in ENGINE.repo.list_courses()
        if not inst or c.institution == inst
    ]


@app.post("/aps")
def aps(req: ApsRequest):
    scores, breakdown = _compute_scores(req.subjects)
    return {"scores": scores, "breakdown": breakdown}


@app.post("/match")
def match(req: MatchRequest):
    return _match(req.scores, req.subjects, req.personality)


@app.post("/compute")
def compute(req: ComputeRequest):
    try:
        scores, breakdown = _compute_scores(req.subjects)
        subject_names = [s.name.strip() for s in req.subjects if s.name and s.name.strip()]
        out = _match(scores, subject_names, req.personality)
        out["scores"] = scores
        out["breakdown"] = breakdown
        return out

    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Compute failed")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Compute failed", "details": str(e)}
        )


@app.get("/personality/quiz")
def personality_quiz() -> List[Dict[str, Any]]:
    return [
        {
            "id": q.id,
            "question": q.question,
            "options": [{"value": o.value, "label": o.label} for o in q.options],
        }
        for q in QUIZ.questions
    ]


@app.post("/personality/classify")
def personality_classify(req: ClassifyRequest):
    try:
        counts = QUIZ.tally(req.answers)
        personality = QUIZ.classify(req.answers)
    except (IncompleteQuizError, InvalidAnswerError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"personality": personality, "counts": counts}


if __name__ == "__main__":
    uvicorn.run("backend.app:app", host=settings.HOST, port=settings.PORT, reload=True)

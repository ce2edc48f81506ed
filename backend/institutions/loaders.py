# backend/institutions/loaders.py
import json
import os
from typing import Any, Dict, List


def _read(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_universities(root: str) -> List[Dict[str, Any]]:
    return _read(os.path.join(root, "universities.json"))


def load_policy(root: str, institution: str) -> Dict[str, Any]:
    path = os.path.join(root, institution, "policy.json")
    if not os.path.exists(path):
        return {}
    return _read(path)


def load_courses(root: str) -> List[Dict[str, Any]]:
    return _read(os.path.join(root, "courses.json"))


def load_quiz(root: str) -> Dict[str, Any]:
    return _read(os.path.join(root, "quiz.json"))

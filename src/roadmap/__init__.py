"""Roadmap catalogs, prerequisite graphs and gap analysis."""

from .catalog import ROADMAPS, Skill, all_skills, core_skills, is_core_skill, skill_weight
from .gaps import Credentials, GapAnalyzer
from .models import Evidence, Gap, UserSkill, ValidationResult
from .prerequisites import PREREQUISITES, get_learning_order, get_suggested_next

__all__ = [
    "ROADMAPS",
    "PREREQUISITES",
    "Skill",
    "UserSkill",
    "Gap",
    "Evidence",
    "ValidationResult",
    "Credentials",
    "GapAnalyzer",
    "all_skills",
    "core_skills",
    "is_core_skill",
    "skill_weight",
    "get_learning_order",
    "get_suggested_next",
]

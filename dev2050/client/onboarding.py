"""
Five-step onboarding wizard that collects a UserProfile for the personalized
learning plan:

    1. skill level  2. target role  3. hours per week  4. learning style  5. current skills
"""
from typing import Any, Awaitable, Callable, Dict, List, Optional

from pydantic import ValidationError

from dev2050.modules.learning_path.schemas import LearningStyle, SkillLevel, UserProfile

TOTAL_STEPS = 5


class OnboardingFlow:
    def __init__(self, submit: Optional[Callable[[UserProfile], Awaitable[Any]]] = None):
        self._submit = submit
        self.step = 1
        self.skill_level: Optional[SkillLevel] = None
        self.target_role = ""
        self.hours_per_week: Optional[int] = None
        self.learning_style: Optional[LearningStyle] = None
        self.current_skills: List[str] = []
        self.is_submitting = False
        self.error: Optional[str] = None

    @property
    def progress(self) -> float:
        return self.step / TOTAL_STEPS * 100

    _CONVERTERS = {
        "skill_level": SkillLevel,
        "target_role": str.strip,
        "hours_per_week": int,
        "learning_style": LearningStyle,
        "current_skills": list,
    }

    def update(self, **fields) -> None:
        for name, value in fields.items():
            if name not in self._CONVERTERS:
                raise AttributeError(f"Unknown onboarding field: {name}")
            if value is not None:
                value = self._CONVERTERS[name](value)
            elif name == "target_role":
                value = ""
            setattr(self, name, value)

    def toggle_skill(self, skill: str) -> None:
        if skill in self.current_skills:
            self.current_skills.remove(skill)
        else:
            self.current_skills.append(skill)

    def can_advance(self) -> bool:
        checks = {
            1: self.skill_level is not None,
            2: bool(self.target_role),
            3: bool(self.hours_per_week) and 0 < self.hours_per_week <= 80,
            4: self.learning_style is not None,
            5: True,  # current skills are optional
        }
        return checks[self.step]

    def next(self) -> bool:
        if self.step >= TOTAL_STEPS or not self.can_advance():
            return False
        self.step += 1
        return True

    def back(self) -> bool:
        if self.step <= 1:
            return False
        self.step -= 1
        return True

    def is_complete(self) -> bool:
        return (
            self.skill_level is not None
            and bool(self.target_role)
            and bool(self.hours_per_week)
            and self.learning_style is not None
        )

    def profile(self) -> UserProfile:
        data: Dict[str, Any] = {
            "skill_level": self.skill_level,
            "target_role": self.target_role,
            "hours_per_week": self.hours_per_week,
            "learning_style": self.learning_style,
            "current_skills": list(self.current_skills),
        }
        return UserProfile(**data)

    async def submit(self) -> Any:
        """
        Build the profile and hand it to the submit callback. Returns the
        callback's result, or None when the profile is incomplete or the
        callback fails.
        """
        if not self.is_complete():
            self.error = "Please complete all steps before submitting."
            return None
        try:
            profile = self.profile()
        except ValidationError as e:
            self.error = str(e)
            return None
        if self._submit is None:
            return profile

        self.is_submitting = True
        self.error = None
        try:
            return await self._submit(profile)
        except Exception as e:
            self.error = f"Could not generate your learning plan: {e}"
            return None
        finally:
            self.is_submitting = False

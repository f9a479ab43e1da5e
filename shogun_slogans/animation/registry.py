"""In-process catalog of animation definitions."""
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from shogun_slogans.animation.definitions import AnimationCategory, AnimationDefinition

logger = logging.getLogger(__name__)


class AnimationRegistry:
    def __init__(self) -> None:
        self._animations: Dict[str, AnimationDefinition] = {}

    def register(self, definition: AnimationDefinition) -> None:
        if definition.name in self._animations:
            logger.debug(f"Overwriting animation definition: {definition.name}")
        self._animations[definition.name] = definition

    def get(self, name: str) -> Optional[AnimationDefinition]:
        return self._animations.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._animations

    def all(self) -> List[AnimationDefinition]:
        return list(self._animations.values())

    def by_category(self, category: AnimationCategory | str) -> List[AnimationDefinition]:
        category = AnimationCategory(category)
        return [a for a in self._animations.values() if a.category == category]

    @staticmethod
    def categories() -> Dict[str, str]:
        return {category.value: category.label for category in AnimationCategory}

    def __len__(self) -> int:
        return len(self._animations)

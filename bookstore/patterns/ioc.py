"""제어의 역전(IoC) 예제 — 요리사와 재료.

Inversion of control example. ``ChefWithoutIoC`` builds its own
ingredients; ``ChefWithIoC`` receives them, and ``KitchenManager`` plays
the container that prepares and hands them over.
"""

import logging

logger = logging.getLogger(__name__)


class Ingredient:
    name: str = ""


class Beef(Ingredient):
    name = "소고기"


class Onion(Ingredient):
    name = "양파"


class Salt(Ingredient):
    name = "소금"


def _recipe(beef: Ingredient, onion: Ingredient, salt: Ingredient) -> str:
    return f"{beef.name}, {onion.name}, {salt.name}으로 요리를 시작합니다."


class ChefWithoutIoC:
    """재료를 직접 준비하는 요리사 — Chef that creates its own ingredients."""

    def __init__(self) -> None:
        # 제어권이 Chef에게 있음 — the chef decides which concrete ingredients exist
        self.beef = Beef()
        self.onion = Onion()
        self.salt = Salt()
        logger.info("Chef prepared ingredients itself")

    def cook(self) -> str:
        return _recipe(self.beef, self.onion, self.salt)


class ChefWithIoC:
    """재료를 주입받는 요리사 — Chef receiving its ingredients through the constructor."""

    def __init__(self, beef: Ingredient, onion: Ingredient, salt: Ingredient) -> None:
        self.beef = beef
        self.onion = onion
        self.salt = salt
        logger.info("Chef received prepared ingredients")

    def cook(self) -> str:
        return _recipe(self.beef, self.onion, self.salt)


class KitchenManager:
    """IoC 컨테이너 역할 — Assembles a chef with freshly prepared ingredients."""

    def create_chef(self) -> ChefWithIoC:
        logger.info("KitchenManager preparing ingredients")
        return ChefWithIoC(Beef(), Onion(), Salt())

from dataclasses import dataclass


@dataclass(frozen=True)
class UserId:
    """利用者ID（認証基盤が発行する subject）"""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("UserId cannot be empty")

    def __str__(self) -> str:
        return self.value

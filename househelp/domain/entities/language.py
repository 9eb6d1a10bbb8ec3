from dataclasses import dataclass


@dataclass(frozen=True)
class Language:
    id: str
    code: str
    name: str
    native_name: str
    flag_emoji: str | None = None
    is_active: bool = True
    is_default: bool = False


@dataclass(frozen=True)
class Translation:
    namespace: str
    key: str
    value: str

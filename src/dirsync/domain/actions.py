from dataclasses import dataclass


class Action:
    pass


@dataclass(frozen=True)
class Copy(Action):
    source: str
    dest: str


@dataclass(frozen=True)
class Move(Action):
    old: str
    new: str


@dataclass(frozen=True)
class Delete(Action):
    name: str

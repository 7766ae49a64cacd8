from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Iterator, List


@dataclass(frozen=True)
class AnnotatedFields:
    """Go field names whose `[]*T` slices should become `[]T`.

    Built once per generation run and handed to the transformer read-only.
    Only membership matters; iteration is sorted so output is reproducible.
    """

    fields: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def of(cls, names: Iterable[str]) -> AnnotatedFields:
        return cls(frozenset(names))

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.fields))

    def __len__(self) -> int:
        return len(self.fields)

    def names(self) -> List[str]:
        return sorted(self.fields)

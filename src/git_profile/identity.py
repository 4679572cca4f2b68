from __future__ import annotations

import dataclasses

_BRE_SPECIAL = frozenset(".[]*^$\\")


def normalize_email(email: str) -> str:
    return email.strip().strip("<>").strip().lower()


def normalize_name(name: str) -> str:
    return name.strip().casefold()


@dataclasses.dataclass(frozen=True)
class MeMatcher:
    emails: frozenset[str]
    names: frozenset[str]

    @classmethod
    def from_values(cls, emails: list[str], names: list[str]) -> MeMatcher:
        return cls(
            frozenset(normalize_email(e) for e in emails if e and e.strip()),
            frozenset(normalize_name(n) for n in names if n and n.strip()),
        )

    @property
    def empty(self) -> bool:
        return not self.emails and not self.names

    @property
    def label(self) -> str:
        if self.emails:
            return sorted(self.emails)[0]
        if self.names:
            return sorted(self.names)[0]
        return ""

    def matches(self, author_name: str, author_email: str) -> bool:
        email = normalize_email(author_email)
        if email and email in self.emails:
            return True
        name = normalize_name(author_name)
        if name and name in self.names:
            return True
        return False

    def git_author_args(self) -> list[str]:
        # git ORs repeated --author patterns and matches them as basic regexes.
        values = sorted(self.emails) + sorted(self.names)
        return [f"--author={_escape_bre(v)}" for v in values]


def _escape_bre(value: str) -> str:
    return "".join("\\" + ch if ch in _BRE_SPECIAL else ch for ch in value)

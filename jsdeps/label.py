"""Data model for build labels (``@repo//pkg:name``)."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass


@dataclass(frozen=True)
class Label:
    """Identifies a build unit by repository, package and name."""

    repo: str = ""
    pkg: str = ""
    name: str = ""
    relative: bool = False

    @classmethod
    def parse(cls, text: str) -> Label:
        """Parse a label string.

        Accepted forms: ``@repo//pkg:name``, ``//pkg:name``, ``//pkg``,
        ``:name`` and a bare ``name`` (relative).
        """
        s = text.strip()
        if not s:
            msg = "empty label"
            raise ValueError(msg)

        repo = ""
        if s.startswith("@"):
            sep = s.find("//")
            if sep < 0:
                msg = f"label {text!r} has a repository but no package"
                raise ValueError(msg)
            repo = s[1:sep]
            s = s[sep:]

        if not s.startswith("//"):
            name = s[1:] if s.startswith(":") else s
            if not name or ":" in name:
                msg = f"invalid relative label {text!r}"
                raise ValueError(msg)
            return cls(name=name, relative=True)

        s = s[2:]
        pkg, colon, name = s.partition(":")
        if not colon:
            name = posixpath.basename(pkg)
        if not name or ":" in name:
            msg = f"invalid label {text!r}"
            raise ValueError(msg)
        return cls(repo=repo, pkg=pkg.rstrip("/"), name=name)

    def __str__(self) -> str:
        if self.relative:
            return f":{self.name}"
        repo = f"@{self.repo}" if self.repo else ""
        if self.pkg and posixpath.basename(self.pkg) == self.name:
            return f"{repo}//{self.pkg}"
        return f"{repo}//{self.pkg}:{self.name}"

    def abs(self, repo: str, pkg: str) -> Label:
        """Return this label made absolute against ``repo`` and ``pkg``."""
        if not self.relative:
            return self
        return Label(repo=repo, pkg=pkg, name=self.name)

    def rel(self, repo: str, pkg: str) -> Label:
        """Return the shortest form of this label as seen from ``pkg``."""
        if self.relative or self.repo != repo:
            return self
        if self.pkg == pkg:
            return Label(name=self.name, relative=True)
        return Label(pkg=self.pkg, name=self.name)

    def renderings(self) -> set[str]:
        """Return every string form this label can take from its own package."""
        absolute = str(self)
        forms = {absolute, f":{self.name}", str(Label(pkg=self.pkg, name=self.name))}
        forms.add(
            f"@{self.repo}//{self.pkg}:{self.name}"
            if self.repo
            else f"//{self.pkg}:{self.name}"
        )
        return forms

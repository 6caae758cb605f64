"""Start-up banner."""

from typing import Iterable, List


class Banner:
    """Box of bordered lines describing the running service.

    Lines are collected with the `add_*` methods and written by `print`.
    """

    def __init__(self, border: str = ":", length: int = 40):
        """Initialize the banner.

        Args:
            border: Single character drawn around the content
            length: Width of the content area

        """
        self.border = border
        self.length = length
        self.lines: List[str] = []

    def add_title(self, title: str) -> "Banner":
        """Add the title, followed by a blank line."""
        self.lines.append(title.ljust(self.length))
        return self.add_spacer()

    def add_section(self, title: str, items: Iterable[str]) -> "Banner":
        """Add a titled list of items, followed by a blank line."""
        self.lines.append(f"{title}:".ljust(self.length))
        self.lines.extend(f"  - {item}".ljust(self.length) for item in items)
        return self.add_spacer()

    def add_spacer(self) -> "Banner":
        """Add a blank line."""
        self.lines.append(" " * self.length)
        return self

    def add_version(self, version: str) -> "Banner":
        """Add the right-aligned version line."""
        self.lines.append(f"ver: {version}".rjust(self.length))
        return self

    def render(self) -> str:
        """Render the banner with its borders."""
        edge = self.border * 2
        rule = self.border * (self.length + 6)
        body = [f"{edge} {line} {edge}" for line in self.lines]
        return "\n".join([rule, *body, rule])

    def print(self):
        """Write the banner to stdout."""
        print(self.render())

"""Rule explanation for new players."""

from __future__ import annotations

from fritz.board.shapes import TOTAL_ANIMAL_TILES, AnimalKind, Shape
from fritz.play.display import ANIMAL_EMOJI


class RuleExplainer:
    """Explains the game and the animal shapes."""

    def explain_rules(self) -> str:
        """Generate condensed rule summary."""
        lines: list[str] = []

        lines.append("=== Fritz ===")
        lines.append("")
        lines.append("Goal: Find every hidden animal on the 9x9 board.")
        lines.append("Search: Pick 3 tiles; you learn how many tiles hit each animal, not which ones.")
        lines.append("Rule: Animals never touch each other, not even diagonally.")
        lines.append(f"Finish: Guess all {TOTAL_ANIMAL_TILES} animal tiles, then submit. One wrong tile loses.")
        lines.append("")
        lines.append("Animals:")
        for kind in AnimalKind:
            lines.append(f"  {self.describe_kind(kind)}")

        return "\n".join(lines)

    def describe_kind(self, kind: AnimalKind) -> str:
        """One-line description of an animal kind."""
        rotations = len(kind.shapes)
        return (
            f"{ANIMAL_EMOJI[kind]} {kind.value.title()}: x{kind.instance_count}, "
            f"{kind.tile_count} tile{'s' if kind.tile_count > 1 else ''}, "
            f"{rotations} rotation{'s' if rotations > 1 else ''}"
        )

    def draw_shapes(self, kind: AnimalKind) -> str:
        """Draw every rotation of *kind* side by side."""
        drawings = [self._draw(shape) for shape in kind.shapes]
        height = max(len(d) for d in drawings)
        lines = []
        for i in range(height):
            parts = []
            for drawing in drawings:
                width = len(drawing[0])
                parts.append(drawing[i] if i < len(drawing) else " " * width)
            lines.append("   ".join(parts).rstrip())
        return "\n".join(lines)

    def _draw(self, shape: Shape) -> list[str]:
        rows = max(r for r, _ in shape.offsets) + 1
        cols = max(c for _, c in shape.offsets) + 1
        cells = set(shape.offsets)
        return [
            "".join("#" if (r, c) in cells else "." for c in range(cols))
            for r in range(rows)
        ]

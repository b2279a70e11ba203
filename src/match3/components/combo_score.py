from dataclasses import dataclass


@dataclass(slots=True)
class ComboScore:
    """Running combo multiplier and accumulated score.

    The combo grows by the number of matched tokens of every resolution pass
    and drops to zero on the first pass that finds nothing.
    """
    combo: int = 0
    score: int = 0

    def register_match_pass(self, match_count: int) -> int:
        if match_count < 0:
            raise ValueError(f"match_count must not be negative, got {match_count}")
        self.combo = 0 if match_count == 0 else self.combo + match_count
        return self.combo

    def award(self, points: int) -> int:
        delta = max(1, self.combo) * points
        self.score += delta
        return delta

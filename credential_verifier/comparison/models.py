from dataclasses import dataclass, field


@dataclass(frozen=True)
class NumericMismatch:
    """A numeric value whose occurrence count differs between the documents."""

    value: str
    count_in_reference: int
    count_in_candidate: int


@dataclass(frozen=True)
class WordStatistics:
    total_reference: int
    total_candidate: int
    common: int
    removed: int
    added: int


@dataclass(frozen=True)
class SimilarityResult:
    """Similarity between a reference and a candidate text, in percent.

    ``final_similarity`` is ``character_similarity`` minus the numeric
    penalty, so it is never greater than ``character_similarity``.
    """

    final_similarity: float
    character_similarity: float
    word_similarity: float
    numeric_penalty: float = 0.0
    numeric_mismatches: list[NumericMismatch] = field(default_factory=list)
    unique_to_reference: list[str] = field(default_factory=list)
    unique_to_candidate: list[str] = field(default_factory=list)
    potential_tampering: bool = False
    word_statistics: WordStatistics | None = None

    @property
    def has_significant_differences(self) -> bool:
        return self.final_similarity < 80

    @property
    def modified_percentage(self) -> int:
        return round(100 - self.final_similarity)

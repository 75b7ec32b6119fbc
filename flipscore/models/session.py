"""Browser session state owned by the presentation layer."""

from dataclasses import dataclass, field

from flipscore.models.deal import RawDealInput


@dataclass(frozen=True)
class SessionState:
    deal: RawDealInput = field(default_factory=RawDealInput)
    share_count: int = 0
    seen_tutorial: bool = False

    def __post_init__(self) -> None:
        if self.share_count < 0:
            raise ValueError("share_count cannot be negative")

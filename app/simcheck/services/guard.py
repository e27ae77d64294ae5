"""
Purpose: Guardrails for text samples.
Content: early, predictable failures before any embedding call; drop
blank samples and refuse oversized ones.
"""

from ..errors import MIN_SAMPLES_MESSAGE, ValidationError
from ..models import TextSample
from .. import config

MIN_SAMPLES = 2


class DefaultSampleGuard:
    def __init__(self, max_chars: int = None):
        self.max_chars = max_chars or config.MAX_SAMPLE_CHARS

    def sanitize(self, text: str) -> str:
        return (text or "").replace("\x00", "").strip()

    def validate_sample(self, sample: TextSample) -> None:
        if len(sample.content) > self.max_chars:
            raise ValidationError(
                f"{sample.label or 'A text sample'} is too long "
                f"(max {self.max_chars} characters)."
            )

    def eligible(self, samples: list[TextSample]) -> list[TextSample]:
        """Samples with non-empty content after trimming, in input order."""
        valid = [s for s in samples if self.sanitize(s.content)]
        if len(valid) < MIN_SAMPLES:
            raise ValidationError(MIN_SAMPLES_MESSAGE)
        for s in valid:
            self.validate_sample(s)
        return valid

import random
from typing import Optional, Sequence

MEME_URLS = (
    'https://i.imgflip.com/1j2oed.jpg',
    'https://i.imgflip.com/2x2l5.jpg',
    'https://i.imgflip.com/152a0.jpg',
    'https://i.imgflip.com/1b6t.jpg',
    'https://i.imgflip.com/csw6.jpg',
    'https://i.imgflip.com/1og9.jpg',
    'https://i.imgflip.com/2k9v.jpg',
    'https://i.imgflip.com/1bh8.jpg',
    'https://i.imgflip.com/265s.jpg',
    'https://i.imgflip.com/275t.jpg',
)


class NameMatchCelebration:
    """Pick a random meme URL when the winner's name matches ``trigger_name``.

    Instances are plain callables ``(winner_name) -> url | None`` so the
    dispatcher can take any function with the same shape.
    """

    def __init__(self, trigger_name: str, choices: Sequence[str] = MEME_URLS, rng=None):
        self.trigger_name = (trigger_name or '').strip().lower()
        self.choices = tuple(choices)
        self.rng = rng or random.Random()

    def __call__(self, winner_name) -> Optional[str]:
        if not self.trigger_name or not self.choices:
            return None
        if not isinstance(winner_name, str) or winner_name.lower() != self.trigger_name:
            return None
        return self.rng.choice(self.choices)

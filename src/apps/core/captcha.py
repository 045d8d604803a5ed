"""Image CAPTCHA for the public contact and email forms.

Challenges live in the Django cache under ``captcha:<id>`` with a TTL, so any
shared cache backend (Redis, Memcached, database) lets several app instances
and restarts see the same entries. Each entry can be checked exactly once:
verification deletes it whether the answer was right or wrong.
"""

import base64
import math
import random
import secrets
import time
import uuid
from io import BytesIO

from django.conf import settings
from django.core.cache import caches
from PIL import Image, ImageDraw, ImageFont

KEY_PREFIX = "captcha:"
WIDTH, HEIGHT = 100, 50
BACKGROUND = "#f5f5f5"
NOISE_DOTS = 100
INTERFERENCE_LINES = 4


def generate_code() -> str:
    """Return a random 4-digit code (1000-9999)."""
    return str(1000 + secrets.randbelow(9000))


class CaptchaStore:
    """Issue and verify single-use challenges kept in a Django cache."""

    def __init__(self, alias: str | None = None, ttl: int | None = None):
        self._alias = alias
        self._ttl = ttl

    @property
    def cache(self):
        return caches[self._alias or settings.CAPTCHA_CACHE_ALIAS]

    @property
    def ttl(self) -> int:
        return self._ttl if self._ttl is not None else settings.CAPTCHA_TTL

    def issue(self) -> tuple[str, str]:
        """Create a challenge and return ``(captcha_id, code)``."""
        captcha_id = str(uuid.uuid4())
        code = generate_code()
        entry = {"code": code, "expires_at": time.time() + self.ttl}
        self.cache.set(KEY_PREFIX + captcha_id, entry, timeout=self.ttl)
        return captcha_id, code

    def verify(self, captcha_id: str, code: str) -> bool:
        """Check ``code`` against the challenge and consume it."""
        if not captcha_id:
            return False
        key = KEY_PREFIX + str(captcha_id)
        entry = self.cache.get(key)
        if entry is None:
            return False
        # Only the caller whose delete succeeds gets to use the entry
        if not self.cache.delete(key):
            return False
        return self._matches(entry, code)

    async def averify(self, captcha_id: str, code: str) -> bool:
        """Async variant of :meth:`verify` for async views."""
        if not captcha_id:
            return False
        key = KEY_PREFIX + str(captcha_id)
        entry = await self.cache.aget(key)
        if entry is None:
            return False
        if not await self.cache.adelete(key):
            return False
        return self._matches(entry, code)

    @staticmethod
    def _matches(entry: dict, code: str) -> bool:
        if time.time() > entry["expires_at"]:
            return False
        answer = str(code or "").strip()
        # compare_digest refuses non-ASCII str, e.g. full-width digits from an IME
        if not (answer.isascii() and answer.isdigit()):
            return False
        return secrets.compare_digest(entry["code"], answer)


captcha_store = CaptchaStore()


def _bezier(p0, p1, p2, p3, steps: int = 24) -> list[tuple[float, float]]:
    points = []
    for i in range(steps + 1):
        t = i / steps
        u = 1 - t
        x = u**3 * p0[0] + 3 * u**2 * t * p1[0] + 3 * u * t**2 * p2[0] + t**3 * p3[0]
        y = u**3 * p0[1] + 3 * u**2 * t * p1[1] + 3 * u * t**2 * p2[1] + t**3 * p3[1]
        points.append((x, y))
    return points


def render_captcha(code: str, rng: random.Random | None = None) -> bytes:
    """
    Draw ``code`` as a distorted PNG.

    Light background speckle, each digit in its own size/colour with a small
    random tilt, then four translucent bezier curves across the glyphs.
    """
    rng = rng or random.SystemRandom()
    image = Image.new("RGB", (WIDTH, HEIGHT), BACKGROUND)
    draw = ImageDraw.Draw(image, "RGBA")

    for _ in range(NOISE_DOTS):
        draw.point((rng.randrange(WIDTH), rng.randrange(HEIGHT)), fill=(0, 0, 0, int(rng.random() * 0.1 * 255)))

    for index, char in enumerate(code):
        size = 20 + int(rng.random() * 10)
        font = ImageFont.load_default(size=size)
        colour = (rng.randrange(100), rng.randrange(100), 155 + rng.randrange(100))

        glyph = Image.new("RGBA", (size * 2, size * 2), (0, 0, 0, 0))
        glyph_draw = ImageDraw.Draw(glyph)
        left, top, right, bottom = glyph_draw.textbbox((0, 0), char, font=font)
        glyph_draw.text(
            (size - (left + right) / 2, size - (top + bottom) / 2),
            char,
            font=font,
            fill=colour,
        )
        glyph = glyph.rotate(math.degrees((rng.random() - 0.5) * 0.4), resample=Image.Resampling.BICUBIC)

        x = 15 + index * 22
        y = HEIGHT / 2 + (rng.random() - 0.5) * 10
        image.paste(glyph, (int(x - size), int(y - size)), glyph)

    for _ in range(INTERFERENCE_LINES):
        colour = (rng.randrange(150), rng.randrange(150), 100 + rng.randrange(150), 128)
        start = (rng.random() * 30, rng.random() * HEIGHT)
        control1 = (WIDTH / 3 + rng.random() * 30, rng.random() * HEIGHT)
        control2 = (WIDTH * 2 / 3 + rng.random() * 30, rng.random() * HEIGHT)
        end = (WIDTH - rng.random() * 30, rng.random() * HEIGHT)
        draw.line(_bezier(start, control1, control2, end), fill=colour, width=1 + int(rng.random() * 2))

    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def captcha_data_url(code: str) -> str:
    return "data:image/png;base64," + base64.b64encode(render_captcha(code)).decode()

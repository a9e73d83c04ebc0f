"""Integer-backed units: weight in grams, money in fen, percentages and scores."""

from __future__ import annotations

import math
import re

PRICE_COLOR = "#08AF5D"

_GRAMS_PER_KG = 1000
_GRAMS_PER_TON = 1000 * _GRAMS_PER_KG
_FEN_PER_JIAO = 10
_FEN_PER_YUAN = 100
_PERCENT_SCALE = 10000

_SPEC = re.compile(r"%(?P<flags>[-+ #0]*)(?P<width>\d+)?(?:\.(?P<prec>\d+))?(?P<verb>[a-zA-Z%])")


def _sprintf(fmt: str, value: float, grouping: bool = False) -> str:
    """Apply a printf-style format to one value, optionally grouping thousands."""

    def render(match: re.Match) -> str:
        verb = match["verb"]
        if verb == "%":
            return "%"
        if grouping and verb in "fFd":
            flags = match["flags"]
            spec = ""
            if "-" in flags:
                spec += "<"
            if "+" in flags:
                spec += "+"
            elif " " in flags:
                spec += " "
            if "0" in flags and "-" not in flags:
                spec += "0"
            spec += (match["width"] or "") + ","
            if verb == "d":
                return format(int(value), spec + "d")
            return format(value, spec + "." + (match["prec"] or "6") + "f")
        return match.group(0) % value

    return _SPEC.sub(render, fmt)


class _Unsigned(int):
    _max: int | None = None

    def __new__(cls, value: int = 0):
        number = int.__new__(cls, value)
        if number < 0 or (cls._max is not None and number > cls._max):
            raise ValueError(f"{cls.__name__} out of range: {int(number)}")
        return number


class Weight(_Unsigned):
    """A weight in grams."""

    def gram(self) -> int:
        return int(self)

    def kg(self) -> float:
        return self / _GRAMS_PER_KG

    def ton(self) -> float:
        return self / _GRAMS_PER_TON

    def format_kg(self, fmt: str) -> str:
        return _sprintf(fmt, self.kg())

    def format_ton(self, fmt: str) -> str:
        return _sprintf(fmt, self.ton())


def weight_by_kg(weight: float) -> Weight:
    """Build a weight from kilograms, truncating to whole grams."""
    return Weight(int(weight * _GRAMS_PER_KG))


def weight_by_ton(weight: float) -> Weight:
    """Build a weight from tonnes, truncating to whole grams."""
    return Weight(int(weight * _GRAMS_PER_TON))


class Price(int):
    """An amount of money in fen (hundredths of a yuan)."""

    def yuan(self) -> float:
        return self / _FEN_PER_YUAN

    def jiao(self) -> float:
        return self / _FEN_PER_JIAO

    def fen(self) -> int:
        return int(self)

    def format(self, fmt: str, thousand: bool = False) -> str:
        """Format the amount in yuan, grouping thousands when asked."""
        return _sprintf(fmt, self.yuan(), thousand)

    def format_color(self, fmt: str, color: str = PRICE_COLOR, thousand: bool = False) -> str:
        """Format the amount wrapped in a coloured HTML span."""
        return self.format('<span style="color: ' + color + '">' + fmt + "</span>", thousand)


def price_yuan(yuan: float) -> Price:
    """Build a price from yuan, truncating to whole fen."""
    return Price(int(yuan * _FEN_PER_YUAN))


class Percent(_Unsigned):
    """A percentage in hundredths of a percent: 10000 is 100%."""

    def valid(self) -> bool:
        return self <= _PERCENT_SCALE

    def numeric(self) -> float:
        """The percentage as a number, e.g. 10% gives 10."""
        return self / 100

    def decimal(self) -> float:
        """The percentage as a fraction, e.g. 10% gives 0.1."""
        return self / _PERCENT_SCALE

    def format_numeric(self) -> str:
        return "%.2f" % self.numeric()

    def format_decimal(self) -> str:
        return "%.2f" % self.decimal()

    def format_int(self) -> str:
        return "%.0f" % self.numeric()


def numeric_percent(per: float) -> Percent:
    """Build a percent from a number such as 10 for 10%."""
    return Percent(int(per * 100))


def decimal_percent(per: float) -> Percent:
    """Build a percent from a fraction such as 0.1 for 10%."""
    return Percent(int(per * _PERCENT_SCALE))


def calculate_price_percent(price: int, percent: int) -> Price:
    """Return ``percent`` of ``price``, truncated; zero when either is not positive."""
    if price <= 0 or percent <= 0:
        return Price(0)
    return Price(int(price) * int(percent) // _PERCENT_SCALE)


class Score(_Unsigned):
    """A rating in tenths, from 0 to 50 for 0.0 to 5.0."""

    _max = 255

    def valid(self) -> bool:
        return self <= 50

    def score(self) -> float:
        return self / 10

    def format(self) -> str:
        return "%.1f" % (self / 10)

    def format_float(self) -> float:
        return float(self.format())


def new_score(score: float) -> Score:
    """Build a score from a rating; out-of-range ratings give 0."""
    scaled = score * 10
    if not math.isfinite(scaled):
        return Score(0)
    value = math.trunc(scaled)
    if not 0 <= value <= 50:
        return Score(0)
    return Score(value)
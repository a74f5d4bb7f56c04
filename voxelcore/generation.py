"""Height-map terrain generation from layered simplex noise."""

from __future__ import annotations

import itertools
import json
import math
from dataclasses import dataclass
from os import PathLike
from typing import Any, Dict, Iterable, Mapping, Sequence, Tuple, Union

from .terrain import CHUNK_WIDTH, Block, local_to_global

IVec3 = Tuple[int, int, int]
Harmonic = Tuple[float, float]

_C_X = 0.211324865405187  # (3 - sqrt(3)) / 6
_C_Y = 0.366025403784439  # (sqrt(3) - 1) / 2
_C_Z = -0.577350269189626  # -1 + 2 * _C_X
_C_W = 0.024390243902439  # 1 / 41


def _mod289(x: float) -> float:
    return x - math.floor(x / 289.0) * 289.0


def _permute(x: float) -> float:
    return _mod289((x * 34.0 + 1.0) * x)


def simplex_noise_2d(x: float, y: float) -> float:
    """Two-dimensional simplex noise, roughly in ``[-1, 1]``."""
    skew = (x + y) * _C_Y
    ix = math.floor(x + skew)
    iy = math.floor(y + skew)
    unskew = (ix + iy) * _C_X
    x0 = x - ix + unskew
    y0 = y - iy + unskew
    i1x, i1y = (1.0, 0.0) if x0 > y0 else (0.0, 1.0)
    corners = (
        (x0, y0),
        (x0 + _C_X - i1x, y0 + _C_X - i1y),
        (x0 + _C_Z, y0 + _C_Z),
    )
    ix = _mod289(ix)
    iy = _mod289(iy)
    hashes = (
        _permute(_permute(iy + oy) + ix + ox)
        for ox, oy in ((0.0, 0.0), (i1x, i1y), (1.0, 1.0))
    )
    total = 0.0
    for (px, py), hashed in zip(corners, hashes):
        falloff = max(0.5 - (px * px + py * py), 0.0) ** 4
        gx = 2.0 * (hashed * _C_W - math.floor(hashed * _C_W)) - 1.0
        h = abs(gx) - 0.5
        a0 = gx - math.floor(gx + 0.5)
        falloff *= 1.79284291400159 - 0.85373472095314 * (a0 * a0 + h * h)
        total += falloff * (a0 * px + h * py)
    return 130.0 * total


def harmonic_noise(harmonics: Iterable[Harmonic], x: float, y: float) -> float:
    """Amplitude-weighted average of noise sampled at several frequencies."""
    value = 0.0
    span = 0.0
    for frequency, amplitude in harmonics:
        value += amplitude * simplex_noise_2d(x / frequency, y / frequency)
        span += amplitude
    if span == 0.0:
        raise ValueError("harmonic amplitudes must not sum to zero")
    return value / span


def sigmoid(x: float) -> float:
    """``exp(x) / (exp(-x) + exp(x))``, evaluated without overflow."""
    if x >= 0.0:
        return 1.0 / (1.0 + math.exp(-2.0 * x))
    e = math.exp(2.0 * x)
    return e / (1.0 + e)


def logistic(x: float) -> float:
    """``ln(1 + exp(x))``, evaluated without overflow."""
    return max(x, 0.0) + math.log1p(math.exp(-abs(x)))


def _to_i32(value: float) -> int:
    if math.isnan(value):
        return 0
    return int(max(-(2**31), min(2**31 - 1, math.trunc(value) if math.isfinite(value) else value)))


@dataclass(frozen=True)
class Profile:
    """Vertical layout of one terrain column."""

    bedrock: int
    sediment: int


def _harmonics(data: Any, name: str) -> Tuple[Harmonic, ...]:
    if isinstance(data, (str, bytes)) or not isinstance(data, Sequence):
        raise ValueError(f"{name} must be a list of [frequency, amplitude] pairs")
    pairs = []
    for entry in data:
        if isinstance(entry, (str, bytes)) or not isinstance(entry, Sequence) or len(entry) != 2:
            raise ValueError(f"{name} entry {entry!r} is not a [frequency, amplitude] pair")
        frequency, amplitude = entry
        if not all(
            isinstance(v, (int, float)) and not isinstance(v, bool) for v in (frequency, amplitude)
        ):
            raise ValueError(f"{name} entry {entry!r} must hold numbers")
        pairs.append((float(frequency), float(amplitude)))
    return tuple(pairs)


@dataclass(frozen=True)
class TerrainGenerator:
    """Generation parameters: noise harmonics for bedrock and relief."""

    bedrock_harmonics: Tuple[Harmonic, ...]
    relief_harmonics: Tuple[Harmonic, ...]

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "bedrock_harmonics", _harmonics(self.bedrock_harmonics, "bedrock_harmonics")
        )
        object.__setattr__(
            self, "relief_harmonics", _harmonics(self.relief_harmonics, "relief_harmonics")
        )

    @classmethod
    def from_file(cls, path: Union[str, PathLike]) -> "TerrainGenerator":
        """Read parameters from a JSON file."""
        with open(path, encoding="utf-8") as handle:
            return cls.from_dict(json.load(handle))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TerrainGenerator":
        """Build from a mapping with ``bedrock_harmonics`` and ``relief_harmonics``."""
        if not isinstance(data, Mapping):
            raise ValueError("generation parameters must be an object")
        missing = {"bedrock_harmonics", "relief_harmonics"} - set(data)
        if missing:
            raise ValueError(f"missing generation parameters: {', '.join(sorted(missing))}")
        return cls(data["bedrock_harmonics"], data["relief_harmonics"])

    def sample(self, x: int, z: int) -> Profile:
        """The column profile at global horizontal position ``(x, z)``."""
        base = harmonic_noise(self.bedrock_harmonics, float(x), float(z))
        dry = logistic(base * 4.0 - 5.0)
        bedrock = sigmoid(base * 2.4 + 0.4) * 40.0 - 32.0
        relief = (harmonic_noise(self.relief_harmonics, float(x), float(z)) + 1.0) ** 2
        relief = relief * dry * 80.0
        return Profile(bedrock=_to_i32(bedrock + relief), sediment=3)

    def generate(self, chunk: Sequence[int]) -> Dict[IVec3, Block]:
        """The solid blocks of ``chunk``, keyed by local position."""
        blocks: Dict[IVec3, Block] = {}
        for x, z in itertools.product(range(CHUNK_WIDTH), range(CHUNK_WIDTH)):
            gx, _, gz = local_to_global(chunk, (x, 0, z))
            profile = self.sample(gx, gz)
            elevation = profile.bedrock
            relative = elevation - chunk[1] * CHUNK_WIDTH
            for y in range(min(relative, CHUNK_WIDTH)):
                blocks[(x, y, z)] = Block.STONE
            for layer, y in enumerate(range(relative, relative + profile.sediment)):
                if not 0 <= y < CHUNK_WIDTH:
                    continue
                if elevation < 2:
                    block = Block.SAND
                elif layer + 1 == profile.sediment:
                    block = Block.GRASS
                else:
                    block = Block.DIRT
                blocks[(x, y, z)] = block
        return blocks
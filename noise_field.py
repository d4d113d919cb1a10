# noise_field.py

import logging
import numba
import numpy as np
import constants

logger = logging.getLogger("constellation_clock")

# --- JIT-Compiled Noise Kernels ---
# Classic 2D gradient (Perlin) noise. Kept outside the NoiseField class so they
# only see NumPy arrays and scalars, as required by Numba's nopython mode.

@numba.jit(nopython=True, fastmath=True)
def _fade(t):
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)

@numba.jit(nopython=True, fastmath=True)
def _lerp(a, b, t):
    return a + t * (b - a)

@numba.jit(nopython=True, fastmath=True)
def _grad(hash_value, x, y):
    h = hash_value & 3
    if h == 0:
        return x + y
    elif h == 1:
        return -x + y
    elif h == 2:
        return x - y
    return -x - y

@numba.jit(nopython=True, fastmath=True)
def _perlin_jit(x, y, perm):
    """Single octave of gradient noise in roughly [-1, 1]."""
    x_floor = np.floor(x)
    y_floor = np.floor(y)
    xi = int(x_floor) & 255
    yi = int(y_floor) & 255
    xf = x - x_floor
    yf = y - y_floor
    u = _fade(xf)
    v = _fade(yf)

    aa = perm[perm[xi] + yi]
    ab = perm[perm[xi] + yi + 1]
    ba = perm[perm[xi + 1] + yi]
    bb = perm[perm[xi + 1] + yi + 1]

    x1 = _lerp(_grad(aa, xf, yf), _grad(ba, xf - 1.0, yf), u)
    x2 = _lerp(_grad(ab, xf, yf - 1.0), _grad(bb, xf - 1.0, yf - 1.0), u)
    return _lerp(x1, x2, v)

@numba.jit(nopython=True, fastmath=True)
def _fractal_noise_jit(x, y, perm, octaves, falloff):
    """
    Sums octaves of gradient noise (frequency doubling, amplitude * falloff),
    normalizes by the total amplitude and maps the result into [0, 1].
    """
    total = 0.0
    amplitude = 1.0
    frequency = 1.0
    amplitude_sum = 0.0
    for _ in range(octaves):
        total += _perlin_jit(x * frequency, y * frequency, perm) * amplitude
        amplitude_sum += amplitude
        amplitude *= falloff
        frequency *= 2.0
    value = (total / amplitude_sum + 1.0) * 0.5
    if value < 0.0:
        return 0.0
    if value > 1.0:
        return 1.0
    return value

@numba.jit(nopython=True, fastmath=True)
def _sample_many_jit(xs, ys, perm, octaves, falloff, out):
    for i in range(xs.shape[0]):
        out[i] = _fractal_noise_jit(xs[i], ys[i], perm, octaves, falloff)


class NoiseField:
    """
    A deterministic, smooth pseudo-random field over two continuous
    coordinates, sampled in [0, 1].

    Data Contract:
    - Inputs:
        - rng (np.random.Generator): Seeds the permutation table.
        - octaves (int): Number of summed noise layers. Must be >= 1.
        - falloff (float): Amplitude multiplier between octaves, in (0, 1].
    - Invariants: The permutation table never changes after construction, so
      equal coordinates always yield equal samples.
    """
    def __init__(self, rng: np.random.Generator,
                 octaves: int = constants.NOISE_OCTAVES,
                 falloff: float = constants.NOISE_FALLOFF):
        if octaves < 1:
            raise ValueError(f"octaves must be >= 1, got {octaves}")
        if not 0.0 < falloff <= 1.0:
            raise ValueError(f"falloff must be in (0, 1], got {falloff}")
        self.octaves = octaves
        self.falloff = falloff
        # Doubled table so perm[perm[xi] + yi + 1] never needs wrapping.
        base = rng.permutation(256).astype(np.int64)
        self.perm = np.concatenate((base, base))
        logger.debug(f"NoiseField created: octaves={octaves}, falloff={falloff}")

    def sample(self, x: float, y: float) -> float:
        return float(_fractal_noise_jit(float(x), float(y), self.perm, self.octaves, self.falloff))

    def sample_many(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """Samples the field at paired coordinate arrays of equal length."""
        xs = np.ascontiguousarray(xs, dtype=np.float64)
        ys = np.ascontiguousarray(ys, dtype=np.float64)
        if xs.shape != ys.shape:
            raise ValueError(f"coordinate shapes differ: {xs.shape} vs {ys.shape}")
        out = np.empty(xs.shape[0], dtype=np.float64)
        _sample_many_jit(xs, ys, self.perm, self.octaves, self.falloff, out)
        return out

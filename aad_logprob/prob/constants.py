# prob/constants.py
import math

SQRT_2 = math.sqrt(2.0)
INV_SQRT_2 = 1.0 / SQRT_2
SQRT_TWO_OVER_PI = math.sqrt(2.0 / math.pi)
NEG_LOG_SQRT_TWO_PI = -0.5 * math.log(2.0 * math.pi)
LOG_HALF = math.log(0.5)

# Tail cutoffs on the scaled difference (y - mu) / (sigma * sqrt(2)).
# Empirical double-precision stability limits; changing them moves the
# boundaries between the formula variants.
CDF_ZERO_BELOW = -37.5 * INV_SQRT_2
CDF_ERFC_BELOW = -5.0 * INV_SQRT_2
CDF_UNIT_ABOVE = 8.25 * INV_SQRT_2

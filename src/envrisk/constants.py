# Magnus formula coefficients (Alduchov-Eskridge style, over water)
MAGNUS_A = 17.27
MAGNUS_B = 237.7  # degC
E0_PA = 610.78

# Ideal-gas conversion of vapor pressure to vapor density
M_WATER = 18.016  # g/mol
R_UNIVERSAL = 8.314  # J/(mol K)
KELVIN = 273.15

ITER_MAX = 100
ITER_TOL = 0.01
SATURATION_TOL = 0.1

RH_GUESS = 50.0
RH_GAIN = 5.0
TEMP_GUESS_F = 70.0
TEMP_GAIN = 2.0
DEW_POINT_OFFSET_F = 10.0

RH_MIN = 0.0
RH_MAX = 100.0

# Bracket used by the refinement pass once the fixed-step budget is spent
SEARCH_TEMP_MIN_F = -100.0
SEARCH_TEMP_MAX_F = 200.0

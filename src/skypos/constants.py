"""Fixed constants: time units, epochs, orbital elements, galactic pole.

Orbital elements are the epoch 1990 January 0.0 values of Duffett-Smith,
"Practical Astronomy with your Calculator or Spreadsheet".
"""

# Time: seconds per unit (for sexagesimal conversion)
SECONDS_PER_MINUTE = 60.0
SECONDS_PER_HOUR = 3600.0
SECONDS_PER_DAY = 86400.0
MINUTES_PER_HOUR = 60.0
HOURS_PER_DAY = 24.0

# Angle: degrees per circle and sexagesimal (DMS/arcmin/arcsec)
DEGREES_PER_CIRCLE = 360.0
ARCMIN_PER_DEGREE = 60.0
ARCSEC_PER_DEGREE = 3600.0
DEGREES_PER_HOUR_RA = 15.0  # right ascension: 360° / 24 h

# Calendar
DAYS_PER_JULIAN_YEAR = 365.25
DAYS_PER_JULIAN_CENTURY = 36525.0
DAYS_PER_TROPICAL_YEAR = 365.242191
J2000 = 2451545.0  # JD of 2000 January 1.5
MJD_OFFSET = 2400000.5
JD_CALENDAR_OFFSET = 1720994.5
GREGORIAN_REFORM_JDN = 2299160  # last JD integer still in the Julian calendar
EPOCH_YEAR = 1990  # orbital elements are referred to 1990 January 0.0

# Sidereal time
SIDEREAL_PER_SOLAR = 1.002737909
SOLAR_PER_SIDEREAL = 0.9972695663
GST_T0_COEFFS = (6.697374558, 2400.051336, 0.000025862)

# Mean obliquity of the ecliptic at J2000 and its secular terms (arcsec)
OBLIQUITY_J2000 = 23.439292
OBLIQUITY_COEFFS = (46.815, 0.0006, -0.00181)

# Sun (epoch 1990)
SUN_ECLIPTIC_LONGITUDE_AT_EPOCH = 279.403303  # epsilon_g
SUN_LONGITUDE_OF_PERIGEE = 282.768422  # omega-bar_g
EARTH_ORBIT_ECCENTRICITY = 0.016713

# Moon (epoch 1990)
MOON_MEAN_LONGITUDE_AT_EPOCH = 318.351648  # l0
MOON_LONGITUDE_OF_PERIGEE_AT_EPOCH = 36.340410  # P0
MOON_LONGITUDE_OF_NODE_AT_EPOCH = 318.510107  # N0
MOON_ORBIT_INCLINATION = 5.145396  # i
MOON_DAILY_MOTION = 13.1763966
MOON_PERIGEE_DAILY_MOTION = 0.1114041
MOON_NODE_DAILY_MOTION = 0.0529539

# Galactic pole (B1950) and ascending node offset
GALACTIC_POLE_RA_DEGREES = 192.25
GALACTIC_POLE_INCLINATION = 27.4
GALACTIC_NODE_LONGITUDE = 33.0

# Kepler solver
KEPLER_TOLERANCE = 1e-6  # radians
KEPLER_MAX_ITERATIONS = 1000

# Sexagesimal seconds are rounded to this many decimals before carrying.
SECOND_DECIMALS = 9

"""Built-in unit catalog, loaded by ``UnitRegistry.initialize``.

One definition per line, in the same syntax accepted by
``UnitRegistry.add_definition``. Each unit may only refer to units defined
above it. SI-prefixed forms (km, mg, ns, kPa...) are resolved on lookup and
need no entry of their own, but the common ones are listed so that exact
lookups succeed with prefixes disabled.
"""

BUILTIN_DEFINITIONS = """
# ── Base units (one per dimension) ──
m = [L]
kg = [M]
s = [T]
A = [I]
K = [THETA]
mol = [N]
cd = [J]
rad = [ANGLE]

# ── Length ──
meter = m
metre = m
km = 1000 m
cm = 0.01 m
mm = 0.001 m
um = 1e-6 m
nm = 1e-9 m
angstrom = 1e-10 m
in = 0.0254 m
inch = in
ft = 0.3048 m
foot = ft
feet = ft
yd = 0.9144 m
yard = yd
mi = 1609.344 m
mile = mi
nmi = 1852 m
au = 149597870700 m
ly = 9460730472580800 m
pc = 3.0856775814913673e16 m

# ── Mass ──
g = 0.001 kg
gram = g
mg = 0.001 g
t = 1000 kg
tonne = t
lb = 0.45359237 kg
pound = lb
oz = 0.0625 lb
ounce = oz
st = 14 lb
ton = 2000 lb
Da = 1.66053906660e-27 kg

# ── Time ──
second = s
ms = 0.001 s
min = 60 s
minute = min
h = 60 min
hr = h
hour = h
day = 24 h
week = 7 day
yr = 365.25 day
year = yr

# ── Temperature (affine) ──
kelvin = K
degC = K - 273.15
celsius = degC
degR = 5/9 K
rankine = degR
degF = degR - 459.67
fahrenheit = degF
delta_degC = K
delta_degF = degR

# ── Electric current, amount, luminous intensity ──
ampere = A
mA = 0.001 A
mole = mol
mmol = 0.001 mol
candela = cd

# ── Angle ──
radian = rad
deg = 0.017453292519943295 rad
degree = deg
arcmin = 1/60 deg
arcsec = 1/60 arcmin
turn = 6.283185307179586 rad
rev = turn

# ── Dimensionless ──
percent = 0.01
ppm = 1e-6

# ── Area and volume ──
ha = 10000 m^2
acre = 4046.8564224 m^2
L = 0.001 m^3
liter = L
litre = L
mL = 0.001 L
gal = 3.785411784 L
gallon = gal
qt = 0.25 gal
pt = 0.5 qt
floz = 1/128 gal

# ── Derived SI ──
Hz = 1/s
hertz = Hz
N = kg m/s^2
newton = N
Pa = N/m^2
pascal = Pa
J = N m
joule = J
W = J/s
watt = W
C = A s
coulomb = C
V = W/A
volt = V
ohm = V/A
F = C/V
farad = F
S = A/V
siemens = S
Wb = V s
weber = Wb
T = Wb/m^2
tesla = T
H = Wb/A
henry = H
lm = cd
lx = lm/m^2

# ── Velocity and acceleration ──
mph = mi/h
kph = km/h
knot = nmi/h
gravity = 9.80665 m/s^2

# ── Force, pressure, energy, power ──
dyn = 1e-5 N
lbf = gravity lb
kgf = gravity kg
bar = 100000 Pa
atm = 101325 Pa
psi = lbf/in^2
mmHg = 133.322387415 Pa
torr = 1/760 atm
cal = 4.184 J
kcal = 1000 cal
Btu = 1055.05585262 J
eV = 1.602176634e-19 J
Wh = W h
kWh = 1000 Wh
erg = 1e-7 J
hp = 745.69987158227022 W
"""

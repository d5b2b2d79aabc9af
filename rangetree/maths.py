MOD = 10 ** 9 + 7


def gcd(a: int, b: int) -> int:
    """Greatest common divisor; gcd(x, 0) == gcd(0, x) == x."""
    while b != 0:
        a, b = b, a % b
    return a


def mod_add(a: int, b: int, mod: int = MOD) -> int:
    # Operands must already be reduced into [0, mod)
    a += b
    if a >= mod:
        a -= mod
    return a


def mod_sub(a: int, b: int, mod: int = MOD) -> int:
    a -= b
    if a < 0:
        a += mod
    return a

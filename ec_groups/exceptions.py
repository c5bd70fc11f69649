class CurveError(ValueError):
    """Elliptic curve precondition violated"""

class InvalidCurveParameters(CurveError):
    """Curve coefficients define a singular curve"""

class GeneratorNotOnCurve(CurveError):
    """Base point does not satisfy the curve equation"""

class PointNotOnCurve(CurveError):
    """Operand is not a point of the curve"""

class InadmissibleCurveForHashing(CurveError):
    """Curve or constants do not meet the hash-to-curve requirements"""

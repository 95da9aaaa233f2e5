"""Conversion rate primitive shared by every experiment statistic."""


def conversion_rate(conversions: int, visitors: int) -> float:
    """
    Conversion rate as a percentage.

    Zero visitors yields 0 rather than a division error. The value is not
    rounded; callers round for display.
    """
    if visitors == 0:
        return 0.0
    return (conversions / visitors) * 100

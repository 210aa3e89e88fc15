from decimal import Decimal, ROUND_HALF_UP

MONEY_PLACES = Decimal("0.01")
WEIGHT_PLACES = Decimal("0.001")


def _num(x) -> Decimal:
    if x is None:
        return Decimal("0")
    if not isinstance(x, Decimal):
        x = Decimal(str(x))
    return x


def money(x) -> Decimal:
    """Always return 2-decimal Decimal with HALF_UP rounding."""
    return _num(x).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def weight(x) -> Decimal:
    """Always return 3-decimal Decimal (grams to the milligram) with HALF_UP rounding."""
    return _num(x).quantize(WEIGHT_PLACES, rounding=ROUND_HALF_UP)


def compute_total_ghat(net_weight, ghat_per_kg) -> Decimal:
    """
    total_ghat = net_weight * ghat_per_kg / 1000

    Example:
      net_weight=1000, ghat_per_kg=5 => 5.000
    """
    return weight(_num(net_weight) * _num(ghat_per_kg) / Decimal("1000"))


def compute_bullion_fine(net_weight, total_ghat, touch, wastage) -> Decimal:
    """
    fine = (net_weight + total_ghat) * (touch + wastage) / 100

    Example:
      net_weight=1000, total_ghat=5, touch=2, wastage=1 => 30.150
    """
    base = _num(net_weight) + _num(total_ghat)
    return weight(base * (_num(touch) + _num(wastage)) / Decimal("100"))


def compute_bullion_amount(net_weight, rate, pics=None) -> Decimal:
    """
    Piece-counted goods are priced per piece, bulk goods per 1000 units of net weight:
      amount = pics * rate              if pics > 0
      amount = net_weight * rate / 1000 otherwise
    """
    pics = _num(pics)
    rate = _num(rate)
    if pics > 0:
        return money(pics * rate)
    return money(_num(net_weight) * rate / Decimal("1000"))


def compute_payment_fine(gross, purity) -> Decimal:
    """fine = gross * purity / 100"""
    return weight(_num(gross) * _num(purity) / Decimal("100"))


def compute_rate_cut_fine(fine, rate) -> Decimal:
    # display value only, never persisted or posted to balances
    return money(_num(fine) * _num(rate) / Decimal("1000"))


def derive_bullion_fields(
        net_weight=None,
        ghat_per_kg=None,
        touch=None,
        wastage=None,
        pics=None,
        rate=None,
) -> dict:
    """
    Derived columns of a sale or purchase line.

    Returns:
      {"total_ghat", "fine", "amount"}
    """
    total_ghat = compute_total_ghat(net_weight, ghat_per_kg)
    return {
        "total_ghat": total_ghat,
        "fine": compute_bullion_fine(net_weight, total_ghat, touch, wastage),
        "amount": compute_bullion_amount(net_weight, rate, pics),
    }


def balance_side(value) -> str:
    """DR when the balance favours the business, CR otherwise."""
    return "DR" if _num(value) >= 0 else "CR"

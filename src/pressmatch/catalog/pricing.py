# ABOUTME: Reduces a list of marketplace prices to lowest, median, and highest.
# ABOUTME: Pricing is additive information and never feeds into match state.

from pressmatch.catalog.provider import PriceSummary


def summarize_prices(prices: list[float], num_for_sale: int | None = None) -> PriceSummary:
    """Summarize listing prices.

    Duplicate and non-positive prices are dropped before sorting. The median
    of an even count is the mean of the two middle values. num_for_sale
    defaults to the number of distinct prices when the marketplace did not
    report it.
    """
    unique = sorted({p for p in prices if p > 0})
    count = num_for_sale if num_for_sale is not None else len(unique)
    if not unique:
        return PriceSummary(lowest=None, median=None, highest=None, num_for_sale=count)

    middle = len(unique) // 2
    if len(unique) % 2 == 0:
        median = (unique[middle - 1] + unique[middle]) / 2
    else:
        median = unique[middle]

    return PriceSummary(
        lowest=unique[0],
        median=round(median, 2),
        highest=unique[-1],
        num_for_sale=count,
    )

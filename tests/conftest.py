"""Shared fixtures: Emami and Axis Bank financial history (Rs. Cr)."""

import pytest

from engine.series import DataPoint, QuarterlyFinancialData

EMAMI_ANNUAL_REVENUE = [
    ("2025", 4776),
    ("2024", 4488),
    ("2023", 4234),
    ("2022", 3996),
    ("2021", 3765),
    ("2020", 3542),
    ("2019", 3334),
    ("2018", 3142),
    ("2017", 2967),
    ("2016", 2809),
    ("2015", 2665),
    ("2014", 2534),
]

EMAMI_QUARTERLY_REVENUE = [
    ("Mar 2025", 963),
    ("Dec 2024", 1187),
    ("Sep 2024", 1045),
    ("Jun 2024", 954),
    ("Mar 2024", 904),
    ("Dec 2023", 1098),
    ("Sep 2023", 967),
    ("Jun 2023", 889),
    ("Mar 2023", 834),
    ("Dec 2022", 1034),
    ("Sep 2022", 923),
    ("Jun 2022", 876),
    ("Mar 2022", 798),
]

AXIS_ANNUAL_REVENUE = [
    ("2025", 129821),
    ("2024", 114968),
    ("2023", 101734),
    ("2022", 89456),
    ("2021", 78234),
    ("2020", 69876),
    ("2019", 62145),
    ("2018", 55432),
    ("2017", 49234),
    ("2016", 43876),
    ("2015", 39123),
    ("2014", 34987),
]

# quarter, index, period, revenue, gross, operating, net, assets, equity,
# debt, interest, depreciation, tax, ocf, capex, working capital
EMAMI_QUARTERS = [
    ("Q4 FY24", 11, "Mar 2024", 963, 689, 219, 162, 4176, 2695, 298, 5, 45, 58, 195, 67, 301),
    ("Q3 FY24", 10, "Dec 2023", 830, 590, 180, 135, 4050, 2580, 310, 6, 43, 48, 168, 55, 285),
    ("Q2 FY24", 9, "Sep 2023", 750, 532, 164, 123, 3950, 2480, 320, 7, 42, 44, 156, 48, 270),
    ("Q1 FY24", 8, "Jun 2023", 680, 483, 148, 112, 3850, 2400, 335, 8, 40, 40, 142, 42, 255),
    ("Q4 FY23", 7, "Mar 2023", 890, 635, 202, 152, 3750, 2350, 350, 9, 38, 54, 175, 58, 240),
    ("Q3 FY23", 6, "Dec 2022", 810, 580, 175, 132, 3650, 2280, 365, 10, 36, 47, 158, 52, 225),
    ("Q2 FY23", 5, "Sep 2022", 720, 515, 156, 118, 3550, 2200, 380, 11, 34, 42, 145, 46, 210),
    ("Q1 FY23", 4, "Jun 2022", 650, 465, 142, 107, 3450, 2150, 395, 12, 32, 38, 132, 40, 195),
    ("Q4 FY22", 3, "Mar 2022", 820, 585, 186, 140, 3380, 2090, 405, 12, 31, 50, 160, 55, 185),
]

QUARTER_FIELDS = (
    "quarter",
    "quarter_index",
    "period",
    "revenue",
    "gross_profit",
    "operating_profit",
    "net_profit",
    "total_assets",
    "shareholders_equity",
    "debt",
    "interest",
    "depreciation",
    "tax",
    "operating_cash_flow",
    "capex",
    "working_capital",
)


def to_points(rows):
    return [DataPoint(period=period, value=float(value)) for period, value in rows]


def quarter_dicts(rows=EMAMI_QUARTERS):
    return [dict(zip(QUARTER_FIELDS, row)) for row in rows]


@pytest.fixture
def emami_annual():
    return to_points(EMAMI_ANNUAL_REVENUE)


@pytest.fixture
def emami_quarterly():
    return to_points(EMAMI_QUARTERLY_REVENUE)


@pytest.fixture
def axis_annual():
    return to_points(AXIS_ANNUAL_REVENUE)


@pytest.fixture
def emami_quarters():
    """Eight quarters: current TTM (Q1-Q4 FY24) and prior TTM (Q1-Q4 FY23)."""
    return [QuarterlyFinancialData.from_dict(d) for d in quarter_dicts(EMAMI_QUARTERS[:8])]


@pytest.fixture
def emami_quarters_long():
    """Nine quarters, enough for growth on the two most recent TTM windows."""
    return [QuarterlyFinancialData.from_dict(d) for d in quarter_dicts(EMAMI_QUARTERS)]


@pytest.fixture
def emami_quarter_payload():
    """The eight-quarter Emami history as plain dicts, as a loader would send it."""
    return quarter_dicts(EMAMI_QUARTERS[:8])

"""Ephemeris test configuration."""

from __future__ import annotations

import pytest

HORIZONS_HEADER = """\
*******************************************************************************
 Revised: July 31, 2013                  Mars                            499 / 4
*******************************************************************************
Ephemeris / API_USER Tue Jul 22 10:00:00 2025 Pasadena, USA      / Horizons
*******************************************************************************
Target body name: Mars (499)                      {source: mar097}
Center body name: Earth (399)                     {source: DE441}
Center-site name: GEOCENTRIC
*******************************************************************************
Start time      : A.D. 2025-Jul-22 00:00:00.0000 UT
Stop  time      : A.D. 2025-Jul-23 00:00:00.0000 UT
Step-size       : 1440 minutes
*******************************************************************************
 Date__(UT)__HR:MN     R.A.__(ICRF)__DEC
***************************************************
"""


def horizons_text(*rows: str, footer: str = "") -> str:
    body = "\n".join(rows)
    return f"{HORIZONS_HEADER}$$SOE\n{body}\n$$EOE\n***************************************************\n{footer}"


@pytest.fixture
def make_horizons_text():
    return horizons_text


@pytest.fixture
def mars_response() -> str:
    return horizons_text(
        " 2025-Jul-22 00:00     177.73210  1.66450",
        " 2025-Jul-23 00:00     178.36621  1.38925",
    )

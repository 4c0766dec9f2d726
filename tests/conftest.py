"""
Shared fixtures for the scatterplot tests.

The sample records mirror the shape of the published cyclist dataset.
"""

from typing import Dict, List

import matplotlib

matplotlib.use("Agg")

import pytest

from dopers.transformers import results_to_points
from dopers.view import ScatterView


@pytest.fixture
def raw_records() -> List[Dict]:
    """Five race results spanning 1995-2015 and 36:50-39:30."""
    return [
        {
            "Time": "36:50", "Place": 1, "Seconds": 2210, "Name": "Marco Pantani",
            "Year": 1995, "Nationality": "ITA",
            "Doping": "Alleged drug use during 1995 due to high hematocrit levels",
            "URL": "https://en.wikipedia.org/wiki/Marco_Pantani#Alleged_drug_use",
        },
        {
            "Time": "36:55", "Place": 2, "Seconds": 2215, "Name": "Marco Pantani",
            "Year": "1997", "Nationality": "ITA",
            "Doping": "Alleged drug use during 1997 due to high hermatocrit levels",
            "URL": "",
        },
        {
            "Time": "37:15", "Place": 3, "Seconds": 2235, "Name": "Lance Armstrong",
            "Year": "2004", "Nationality": "USA",
            "Doping": "2004 Tour de France title stripped by UCI in 2012",
            "URL": "",
        },
        {
            "Time": "39:12", "Place": 30, "Seconds": 2352, "Name": "Nairo Quintana",
            "Year": "2015", "Nationality": "COL", "Doping": "", "URL": "",
        },
        {
            "Time": "39:30", "Place": 35, "Seconds": 2370, "Name": "Miguel Indurain",
            "Year": "1995", "Nationality": "ESP", "Doping": "", "URL": "",
        },
    ]


@pytest.fixture
def points(raw_records):
    return results_to_points(raw_records)


@pytest.fixture
def loaded_view(raw_records) -> ScatterView:
    view = ScatterView()
    view.load(lambda: raw_records)
    return view

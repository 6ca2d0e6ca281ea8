"""
Module with common types used in type annotations throughout this project.
"""

from typing import Union, Tuple, Iterable, Mapping, Any

import pandas as pd


StrOrInt = Union[str, int]

Triplet = Tuple[StrOrInt, str, Union[int, float]]

TripletSource = Union[pd.DataFrame, Iterable[Union[Triplet, Mapping[str, Any]]]]

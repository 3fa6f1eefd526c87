"""SQL statement builders for the airport and fix tables."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class Airport:
    """A row of the aerodrome table."""

    idx: int = 0
    ad_id: str = ""
    ad_nm: str = ""
    lat: str = ""
    lon: str = ""
    icao_cd: str = ""


@dataclass
class Fix:
    """A row of the fix view."""

    idx: int = 0
    fix_id: str = ""
    lat: str = ""
    lon: str = ""


class SqlGen(ABC):
    """Base builder of the statements for one table."""

    def __init__(self, table_name: str) -> None:
        self.table_name = table_name

    def insert_main_table_sql(self) -> str:
        """Statement inserting into the main table; empty when unsupported."""
        return ""

    def insert_sub_table_sql(self) -> str:
        """Statement inserting into the sub table; empty when unsupported."""
        return ""

    @abstractmethod
    def count_main_table_sql(self) -> str:
        """Statement counting rows of the main table."""

    def count_sub_table_sql(self) -> str:
        """Statement counting rows of the sub table; empty when unsupported."""
        return ""

    @abstractmethod
    def main_table_sql(self) -> str:
        """Statement selecting the records of the main table."""


class AirportSqlGen(SqlGen):
    """Statements for the aerodrome table."""

    def count_main_table_sql(self) -> str:
        return ""

    def main_table_sql(self) -> str:
        return "SELECT AD_ID, AD_NM, LAT, LON, ICAO_CD FROM TB_AD WHERE ICAO_CD = 'RK'"


class FixSqlGen(SqlGen):
    """Statements for the fix view."""

    def count_main_table_sql(self) -> str:
        return ""

    def main_table_sql(self) -> str:
        return "SELECT FIX_ID, ICAO_CD, LAT, LON FROM V_FIX WHERE ICAO_CD = 'RK'"
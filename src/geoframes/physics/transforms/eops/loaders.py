"""Module defining the infrastructure used to retrieve EOP values from various sources."""

from __future__ import annotations

# Standard Library Imports
import datetime
from abc import ABC, abstractmethod
from pathlib import Path
from urllib.parse import urlparse
from urllib.request import urlopen

# Third Party Imports
import erfa

# Local Imports
from ....common.behavioral_config import BehavioralConfig
from ....common.exceptions import EOPLookupError
from ....common.logger import geoframesLogDebug, geoframesLogError
from ....common.utilities import loadDatFile
from ... import constants as const
from . import EarthOrientationParameter, MissingEOP

DAT_COLUMN_COUNT: int = 13
"""int: Columns per row: ``Y M D MJD x y UT1-UTC LOD dPsi dEps dX dY DAT``."""


def interpolateEOP(
    first: EarthOrientationParameter,
    second: EarthOrientationParameter,
    fraction: float,
) -> EarthOrientationParameter:
    """Linearly interpolate between two consecutive daily EOP records.

    UT1 is interpolated as UT1 - TAI, which is continuous across leap seconds, and then shifted
    back by `first`'s TAI - UTC. Leap seconds themselves are never interpolated.

    Args:
        first (EarthOrientationParameter): record at the start of the day.
        second (EarthOrientationParameter): record at the start of the next day.
        fraction (float): fraction of the day elapsed since `first`, in [0, 1).

    Returns:
        EarthOrientationParameter: interpolated record, dated like `first`.
    """

    def lerp(start: float, stop: float) -> float:
        return start + fraction * (stop - start)

    ut1_tai = lerp(
        first.delta_ut1 - first.delta_atomic_time,
        second.delta_ut1 - second.delta_atomic_time,
    )
    return EarthOrientationParameter(
        date=first.date,
        x_p=lerp(first.x_p, second.x_p),
        y_p=lerp(first.y_p, second.y_p),
        d_x=lerp(first.d_x, second.d_x),
        d_y=lerp(first.d_y, second.d_y),
        delta_ut1=ut1_tai + first.delta_atomic_time,
        length_of_day=lerp(first.length_of_day, second.length_of_day),
        delta_atomic_time=first.delta_atomic_time,
    )


class EOPLoader(ABC):
    """Base EOP provider: a table of daily :class:`.EarthOrientationParameter` rows.

    Rows are read lazily by :meth:`.load` on the first query, then kept in memory keyed by date.
    """

    def __init__(self, location: str):
        """Record where the rows come from, without reading them yet.

        Args:
            location (str): file path, URL, or other source understood by the concrete loader.
        """
        self._location: str = location
        self._eop_data: dict[datetime.date, EarthOrientationParameter] = {}
        self._is_loaded: bool = False

    def _ensureLoaded(self) -> None:
        """Call :meth:`.load` unless it already ran."""
        if not self._is_loaded:
            self.load()

    def getEarthOrientationParameters(self, eop_date: datetime.date) -> EarthOrientationParameter:
        """Return the row tabulated for `eop_date`.

        Args:
            eop_date (``datetime.date``): UTC calendar date of the row.

        Returns:
            :class:`.EarthOrientationParameter`: row valid at 0h UTC on `eop_date`.

        Raises:
            MissingEOP: If the loaded data has no row for `eop_date`.
        """
        self._ensureLoaded()
        try:
            return self._eop_data[eop_date]
        except KeyError:
            err = f"No EOP data loaded from '{self._location}' for {eop_date}"
            raise MissingEOP(err) from None

    def lookup(
        self,
        utc1: float,
        utc2: float,
        interpolate: bool | None = None,
    ) -> EarthOrientationParameter:
        """Return EOPs valid at a two-part UTC quasi-Julian date.

        Args:
            utc1 (float): first part of the UTC date, (days).
            utc2 (float): second part of the UTC date, (days).
            interpolate (bool, optional): interpolate linearly between the bracketing daily
                records. Defaults to the ``eop.Interpolate`` config value. When ``False`` the
                record for the UTC calendar day is returned unchanged.

        Returns:
            :class:`.EarthOrientationParameter`: EOP values at the requested instant.

        Raises:
            MissingEOP: If a required daily record is not available.
        """
        if interpolate is None:
            interpolate = BehavioralConfig.getConfig().eop.Interpolate

        year, month, day, fraction = erfa.jd2cal(utc1, utc2)
        eop_date = datetime.date(int(year), int(month), int(day))
        fraction = float(fraction)

        first = self.getEarthOrientationParameters(eop_date)
        if not interpolate or fraction == 0.0:
            return first

        second = self.getEarthOrientationParameters(eop_date + datetime.timedelta(days=1))
        return interpolateEOP(first, second, fraction)

    @abstractmethod
    def load(self):
        """Read every row from the source into :attr:`._eop_data`.

        Implementations must set :attr:`._is_loaded` once done.
        """
        raise NotImplementedError

    def validEOP(self, eop_date: datetime.date) -> bool:
        """Whether a row is tabulated for `eop_date`."""
        self._ensureLoaded()
        return eop_date in self._eop_data

    def earliestEOPDate(self) -> datetime.date:
        """Returns the date of the first tabulated row."""
        self._ensureLoaded()
        return min(self._eop_data)

    def latestEOPDate(self) -> datetime.date:
        """Returns the date of the last tabulated row."""
        self._ensureLoaded()
        return max(self._eop_data)

    def setEOPData(self, eop_date: datetime.date, eops: EarthOrientationParameter):
        """Replace (or add) the row for `eop_date`, in memory only.

        Args:
            eop_date (datetime.date): date of the row. A ``datetime`` is truncated to its date.
            eops (EarthOrientationParameter): the row's values.

        Raises:
            TypeError: If `eop_date` is neither a ``date`` nor a ``datetime``.
        """
        if isinstance(eop_date, datetime.datetime):
            eop_date = eop_date.date()
        elif not isinstance(eop_date, datetime.date):
            err = f"Unexpected 'eop_date' type: {type(eop_date)}"
            raise TypeError(err)

        self._ensureLoaded()
        self._eop_data[eop_date] = eops


class DotDatEOPLoader(EOPLoader, ABC):
    """Base for loaders reading whitespace separated '.dat' tables.

    Rows follow the Celestrak ``EOP-All.txt`` column layout, angles in arcseconds::

        YYYY MM DD MJD x y UT1-UTC LOD dPsi dEpsilon dX dY DAT
    """

    def _parseDatData(self, raw_data: list[list[float]]):
        """Convert parsed '.dat' rows to records, keyed by date.

        Args:
            raw_data (list[list[float]]): EOP data file contents parsed using
                :meth:`.loadDatFile()`.

        Raises:
            EOPLookupError: If a row doesn't have the expected number of columns.
        """
        for row_num, eop in enumerate(raw_data):
            if len(eop) < DAT_COLUMN_COUNT:
                msg = (
                    f"Malformed EOP data in '{self._location}': row {row_num} has {len(eop)} "
                    f"columns, expected {DAT_COLUMN_COUNT}"
                )
                geoframesLogError(msg)
                raise EOPLookupError(msg)

            eop_date = datetime.date(int(eop[0]), int(eop[1]), int(eop[2]))
            self._eop_data[eop_date] = EarthOrientationParameter(
                date=eop_date,
                x_p=eop[4] * const.ARCSEC2RAD,
                y_p=eop[5] * const.ARCSEC2RAD,
                d_x=eop[10] * const.ARCSEC2RAD,
                d_y=eop[11] * const.ARCSEC2RAD,
                delta_ut1=eop[6],
                length_of_day=eop[7],
                delta_atomic_time=int(eop[12]),
            )
        self._is_loaded = True
        geoframesLogDebug(f"Loaded {len(raw_data)} EOP records from '{self._location}'")

    def _unparseDatData(self, eops: list[EarthOrientationParameter]) -> list[str]:
        """Format `eops` as '.dat' rows, the inverse of :meth:`._parseDatData`.

        The nutation corrections dPsi/dEpsilon are not tracked and are written as zero.

        Args:
            eops (list[EarthOrientationParameter]): Earth orientation parameters to dump.

        Returns:
            list[str]: one line per record, without trailing newlines.
        """
        return [
            " ".join(
                [
                    f"{eop.date.year:d} {eop.date.month:d} {eop.date.day:d}",
                    f"{int(erfa.cal2jd(eop.date.year, eop.date.month, eop.date.day)[1]):d}",
                    f"{eop.x_p * const.RAD2ARCSEC: .7f} {eop.y_p * const.RAD2ARCSEC: .7f}",
                    f"{eop.delta_ut1: .7f} {eop.length_of_day: .7f}",
                    f"{0.0: .7f} {0.0: .7f}",
                    f"{eop.d_x * const.RAD2ARCSEC: .7f} {eop.d_y * const.RAD2ARCSEC: .7f}",
                    f"{eop.delta_atomic_time:d}",
                ],
            )
            for eop in eops
        ]


class LocalDotDatEOPLoader(DotDatEOPLoader):
    """Loads EOPs from a '.dat' file on the local file system."""

    def __init__(self, location: str) -> None:
        """Resolve the file path, expanding ``~``.

        Args:
            location (str): Path of the '.dat' file to load.
        """
        super().__init__(location)
        self._path = Path(self._location).expanduser()

    def load(self) -> None:
        """Read the '.dat' file into local memory."""
        self._parseDatData(loadDatFile(self._path))

    def save(self, path: str | Path | None = None) -> Path:
        """Write the currently loaded records back out as a '.dat' file.

        Args:
            path (str | Path, optional): destination. Defaults to the file this loader reads.

        Returns:
            Path: the file written.
        """
        self._ensureLoaded()

        out_path = Path(path).expanduser() if path else self._path
        eops = [self._eop_data[day] for day in sorted(self._eop_data)]
        out_path.write_text("\n".join(self._unparseDatData(eops)) + "\n", encoding="utf-8")
        return out_path


class RemoteDotDatEOPLoader(DotDatEOPLoader):
    """Loads EOPs from a '.dat' file published at a URL, e.g. Celestrak's ``EOP-All.txt``.

    The download is cached on disk under :attr:`.CACHE_LOCATION`, mirroring the URL's host & path,
    so later processes read the cached copy instead.
    """

    CACHE_LOCATION = Path("~/.geoframes/eop-cache/").expanduser()
    """Path: root directory of the download cache."""

    def __init__(self, location: str, clear_cache: bool = False) -> None:
        """Work out the cache path for the URL.

        Args:
            location (str): URL of the EOP data file.
            clear_cache (bool, optional): delete any cached copy so the next :meth:`.load`
                downloads the file again.

        Raises:
            ValueError: If `location` has no network location.
        """
        super().__init__(location)
        parsed_url = urlparse(self._location)
        if not parsed_url.netloc:
            err = f"Unable to parse URL: {self._location}"
            raise ValueError(err)

        self._cache_path = (
            self.CACHE_LOCATION / parsed_url.netloc.replace(".", "_") / parsed_url.path.lstrip("/")
        )
        if clear_cache:
            self._cache_path.unlink(missing_ok=True)

    @staticmethod
    def _isDataLine(line: bytes) -> bool:
        """Whether `line` is a row of numbers, rather than a header or section marker."""
        fields = line.split()
        try:
            [float(field) for field in fields]
        except ValueError:
            return False
        return bool(fields)

    def _download(self) -> None:
        """Fetch the remote file, keeping only its data rows in the cache.

        Rows are streamed into a sibling ``.part`` file that only replaces the cache once the
        download completes, so an interrupted transfer never leaves a truncated cache behind.
        """
        geoframesLogDebug(f"Downloading EOP data from {self._location}")
        self._cache_path.parent.mkdir(parents=True, exist_ok=True)
        partial_path = self._cache_path.with_name(f"{self._cache_path.name}.part")
        try:
            with (
                urlopen(self._location) as remote_data,  # noqa: S310
                open(partial_path, "wb") as cache_file,
            ):
                cache_file.writelines(line for line in remote_data if self._isDataLine(line))
            partial_path.replace(self._cache_path)
        except Exception:
            geoframesLogError(f"Failed to download EOP data from {self._location}")
            raise
        finally:
            partial_path.unlink(missing_ok=True)

    def load(self) -> None:
        """Read the cached copy into local memory, downloading it first if needed."""
        if not self._cache_path.exists():
            self._download()

        self._parseDatData(loadDatFile(self._cache_path))

"""
Historical country name normalization

Pure translation from a country name as recorded (e.g. on a birth record)
to the modern country occupying the same territory. Callers pass the
Former_countries rows in; nothing here touches the database, so display
and search code can use it on any record.
"""

from datetime import date


def _normalize(name: str) -> str:
    return " ".join(name.split()).casefold()


def find_former_country(country: str, on_date: date | None, former_countries):
    """
    Find the former country matching a recorded name

    Args:
        country: Country name as recorded
        on_date: Date of the record; None matches any period
        former_countries: Iterable of rows with name, date_from, date_to
                          and modern_location attributes

    Returns:
        The matching row, or None
    """
    if not country or not country.strip():
        return None

    wanted = _normalize(country)
    for former in former_countries:
        if _normalize(former.name) != wanted:
            continue
        if on_date is None or former.date_from <= on_date <= former.date_to:
            return former
    return None


def modernize_country(country: str | None, on_date: date | None, former_countries) -> str | None:
    """Modern name for a historical country, or the input unchanged"""
    former = find_former_country(country, on_date, former_countries)
    if former is None:
        return country
    return former.modern_location

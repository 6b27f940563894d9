"""Offset paging shared by the list queries."""

from sqlalchemy.orm import Query


def fetch_page(query: Query, total: int, page: int, page_size: int) -> list:
    """
    Return rows `page` of `query`, `page_size` at a time.

    Pages past the end are empty and never reach the store, so an
    arbitrarily large page number cannot overflow the driver's integers.
    """
    offset = (page - 1) * page_size
    if offset >= total:
        return []
    return query.offset(offset).limit(page_size).all()

from personapi.paging import Direction, Order, Page, PageRequest, parse_sort


def test_parse_sort_handles_directions_and_defaults():
    assert parse_sort(["name,desc", "id"]) == (
        Order("name", Direction.desc),
        Order("id", Direction.asc),
    )
    assert parse_sort(["city,name,DESC"]) == (
        Order("city", Direction.desc),
        Order("name", Direction.desc),
    )
    assert parse_sort([",", ""]) == ()
    assert parse_sort(None) == ()


def test_order_round_trips_to_query_param():
    assert Order("name", Direction.desc).to_param() == "name,desc"


def test_page_request_offset():
    assert PageRequest(page=3, size=7).offset == 21


def test_page_navigation_flags():
    middle = Page(content=(1, 2), number=1, size=2, total_elements=5)
    assert middle.total_pages == 3
    assert middle.has_next and middle.has_previous

    last = Page(content=(5,), number=2, size=2, total_elements=5)
    assert last.is_last and not last.has_next

    empty = Page(content=(), number=0, size=20, total_elements=0)
    assert empty.total_pages == 0
    assert empty.is_first and empty.is_last

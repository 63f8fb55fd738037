import io

import pytest

from deskkit.menu import BUFSIZ, Item, Menu, cistrstr, read_items


def texts(items):
    return [item.text for item in items]


def make(words, **kwargs):
    return Menu([Item(w) for w in words], **kwargs)


def test_cistrstr_finds_case_insensitively():
    assert cistrstr("Hello World", "world") == 6
    assert cistrstr("abc", "") == 0
    assert cistrstr("abc", "xyz") is None


def test_read_items_strips_newlines():
    items = read_items(io.StringIO("a\nb\nc"))
    assert texts(items) == ["a", "b", "c"]
    assert all(not item.out for item in items)


def test_empty_input_matches_all_in_order():
    menu = make(["one", "two", "three"])
    assert texts(menu.matches) == ["one", "two", "three"]
    assert menu.sel == 0


def test_match_order_exact_prefix_substring():
    menu = make(["foobar", "bar", "barfoo", "xbar", "nope"])
    menu.insert("bar")
    assert texts(menu.matches) == ["bar", "barfoo", "foobar", "xbar"]


def test_all_tokens_must_match():
    menu = make(["foo bar", "foo", "bar foo", "baz"])
    menu.insert("foo bar")
    assert texts(menu.matches) == ["foo bar", "bar foo"]


def test_case_insensitive_matching():
    menu = make(["Firefox", "terminal"], case_insensitive=True)
    menu.insert("FIRE")
    assert texts(menu.matches) == ["Firefox"]
    sensitive = make(["Firefox", "terminal"])
    sensitive.insert("FIRE")
    assert sensitive.matches == []
    assert sensitive.selected is None


def test_editing_cursor_and_deletion():
    menu = make([])
    menu.insert("abc")
    assert menu.cursor == 3
    menu.left()
    assert menu.cursor == 2
    menu.backspace()
    assert (menu.text, menu.cursor) == ("ac", 1)
    menu.delete()
    assert (menu.text, menu.cursor) == ("a", 1)
    menu.delete()
    assert menu.text == "a"


def test_kill_to_end_and_start():
    menu = make([])
    menu.insert("hello world")
    menu.cursor = 5
    menu.kill_to_end()
    assert menu.text == "hello"
    menu.kill_to_start()
    assert (menu.text, menu.cursor) == ("", 0)


def test_delete_word_and_move_word():
    menu = make([])
    menu.insert("hello world  ")
    menu.delete_word()
    assert menu.text == "hello "
    menu.move_word(-1)
    assert menu.cursor == 0
    menu.move_word(+1)
    assert menu.cursor == len("hello")


def test_insert_refuses_overlong_input():
    menu = make([])
    menu.insert("x" * (BUFSIZ - 1))
    menu.insert("y")
    assert len(menu.text) == BUFSIZ - 1
    assert "y" not in menu.text


def test_vertical_paging():
    menu = make(["a", "b", "c", "d", "e"], lines=2)
    assert texts(menu.visible()) == ["a", "b"]
    menu.down()
    menu.down()
    assert menu.selected.text == "c"
    assert texts(menu.visible()) == ["c", "d"]
    menu.up()
    assert texts(menu.visible()) == ["a", "b"]
    menu.page_next()
    assert menu.selected.text == "c"
    menu.page_prev()
    assert menu.selected.text == "a"


def test_end_and_home():
    menu = make(["a", "b", "c", "d", "e"], lines=2)
    menu.end()
    assert menu.selected.text == "e"
    assert menu.selected in menu.visible()
    menu.home()
    assert menu.selected.text == "a"
    assert menu.visible()[0].text == "a"


def test_selection_always_visible():
    menu = make([str(n) for n in range(10)], lines=3)
    for _ in range(9):
        menu.down()
        assert menu.selected in menu.visible()
    for _ in range(9):
        menu.up()
        assert menu.selected in menu.visible()


def test_lines_limited_by_item_count():
    menu = make(["a", "b"], lines=10)
    assert menu.lines == 2


def test_complete_copies_selection():
    menu = make(["alpha", "beta"])
    menu.insert("be")
    menu.complete()
    assert menu.text == "beta"
    assert menu.cursor == 4
    assert texts(menu.matches) == ["beta"]


def test_horizontal_right_moves_selection_at_end():
    menu = make(["aa", "bb", "cc"], width=60)
    menu.right()
    assert menu.selected.text == "bb"
    menu.left()
    assert menu.selected.text == "aa"


@pytest.mark.parametrize("words", [["a"], ["a", "b", "c"]])
def test_visible_is_prefix_of_matches_initially(words):
    menu = make(words, lines=1)
    assert menu.visible() == menu.matches[: len(menu.visible())]
    assert len(menu.visible()) == 1
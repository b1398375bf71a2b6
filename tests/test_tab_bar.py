from tabchat.common import ServerSource, TabStyle
from tabchat.config.model import Colors
from tabchat.ui.surface import UNDERLINE, CellBuffer
from tabchat.ui.tab import Tab, tab_style
from tabchat.ui.tabbed import MessageLog, TabbedUI

COLORS = Colors()


def make_tab(name: str, style=TabStyle.NORMAL, switch=None) -> Tab:
    return Tab(
        visible_name=name,
        widget=MessageLog(),
        src=ServerSource(name),
        style=style,
        switch=switch,
    )


class TestTabDraw:
    def test_active_tab_ignores_stored_style(self):
        buf = CellBuffer(10, 1)
        make_tab("abc", style=TabStyle.HIGHLIGHT).draw(buf, COLORS, 0, 0, True)
        assert buf.cell(0, 0).fg == COLORS.tab_active.fg
        assert buf.cell(0, 0).bg == COLORS.tab_active.bg

    def test_inactive_styles_follow_mapping(self):
        expected = {
            TabStyle.NORMAL: COLORS.tab_normal,
            TabStyle.JOIN_OR_PART: COLORS.tab_joinpart,
            TabStyle.NEW_MSG: COLORS.tab_new_msg,
            TabStyle.HIGHLIGHT: COLORS.tab_highlight,
        }
        for style, colors in expected.items():
            assert tab_style(style, COLORS) == colors
            buf = CellBuffer(10, 1)
            make_tab("abc", style=style).draw(buf, COLORS, 0, 0, False)
            assert (buf.cell(1, 0).fg, buf.cell(1, 0).bg) == (colors.fg, colors.bg)

    def test_only_first_switch_occurrence_is_underlined(self):
        buf = CellBuffer(10, 1)
        make_tab("#rust-r", switch="r").draw(buf, COLORS, 0, 0, False)
        fg = COLORS.tab_normal.fg
        assert buf.row_text(0).startswith("#rust-r")
        assert buf.cell(1, 0).fg == fg | UNDERLINE
        assert buf.cell(6, 0).fg == fg
        assert all(buf.cell(x, 0).fg == fg for x in (0, 2, 3, 4, 5))

    def test_switch_match_is_case_sensitive(self):
        buf = CellBuffer(10, 1)
        make_tab("Rr", switch="r").draw(buf, COLORS, 0, 0, False)
        assert buf.cell(0, 0).fg == COLORS.tab_normal.fg
        assert buf.cell(1, 0).fg == COLORS.tab_normal.fg | UNDERLINE

    def test_draw_does_not_mutate_tab(self):
        tab = make_tab("abc", style=TabStyle.NEW_MSG, switch="a")
        before = (tab.visible_name, tab.style, tab.switch, tab.src)
        tab.draw(CellBuffer(10, 1), COLORS, 0, 0, True)
        assert (tab.visible_name, tab.style, tab.switch, tab.src) == before

    def test_wide_characters_advance_by_display_width(self):
        tab = make_tab("日本x")
        assert tab.width() == 5
        buf = CellBuffer(10, 1)
        tab.draw(buf, COLORS, 2, 0, False)
        assert buf.cell(2, 0).ch == "日"
        assert buf.cell(4, 0).ch == "本"
        assert buf.cell(6, 0).ch == "x"
        assert buf.cell(3, 0).ch == " "

    def test_out_of_bounds_cells_are_dropped(self):
        buf = CellBuffer(2, 1)
        make_tab("abcdef").draw(buf, COLORS, 0, 0, False)
        assert buf.row_text(0) == "ab"


def test_tab_bar_lays_tabs_out_left_to_right():
    ui = TabbedUI()
    ui.new_server_tab("irc.x", None)
    buf = CellBuffer(40, 2)
    ui.draw_tab_bar(buf, pos_y=1)
    assert buf.row_text(1).startswith("mentions irc.x")
    # mentions is active
    assert buf.cell(0, 1).fg & ~UNDERLINE == COLORS.tab_active.fg
    assert buf.cell(9, 1).fg & ~UNDERLINE == COLORS.tab_normal.fg


def test_cell_buffer_clear():
    buf = CellBuffer(3, 1)
    make_tab("abc").draw(buf, COLORS, 0, 0, False)
    buf.clear()
    assert buf.row_text(0) == "   "


def test_underline_is_the_only_attribute_bit():
    from tabchat.ui import surface

    assert surface.__all__ == ["UNDERLINE", "Surface", "Cell", "CellBuffer"]

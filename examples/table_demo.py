import sys

from gridtui import (
    AnsiBackend, Block, Borders, Color, Direction, Layout, Length, Margin, Min,
    Percentage, Style, Table, TableConfig, Terminal, alt_screen,
)

PROCESSES = [
    ["1", "init", "0.0", "sleeping"],
    ["412", "sshd", "0.1", "sleeping"],
    ["977", "postgres", "3.4", "running"],
    ["1203", "python3", "12.9", "running"],
    ["1388", "nginx: worker process", "0.7", "sleeping"],
]


def render(frame) -> None:
    top, bottom = Layout(
        Direction.VERTICAL, [Min(0), Length(3)], margin=Margin(1, 0)
    ).split(frame.size())
    table = Table(
        ["PID", "Command", "CPU%", "State"],
        PROCESSES,
        TableConfig(
            block=Block(title=" Processes ", borders=Borders.ALL),
            widths=(Length(6), Percentage(50), Length(6), Min(8)),
            highlight_symbol="> ",
            selected=3,
            header_style=Style(fg=Color.Cyan).bold(),
            highlight_style=Style(fg=Color.Black, bg=Color.LightYellow),
        ),
    )
    frame.render_widget(table, top)
    frame.render_widget(Block(title=" Press Enter to exit ", borders=Borders.ALL), bottom)


if __name__ == "__main__":
    backend = AnsiBackend()
    with alt_screen(backend), Terminal(backend) as term:
        term.hide_cursor()
        term.clear()
        term.draw(render)
        sys.stdin.readline()

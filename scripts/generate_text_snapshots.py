#!/usr/bin/env python3
import sys
from pathlib import Path

TEMPLATE_BEGIN = "<!-- BEGIN: SNAPSHOTS -->"
TEMPLATE_END = "<!-- END: SNAPSHOTS -->"


def render_widgets_section() -> str:
    try:
        from gridtui import Block, Borders, Length, Margin, Percentage, Table, TableConfig
        from gridtui import headless_render

        header = ["Name", "Size", "Kind"]
        rows = [["notes.md", "4 KiB", "text"], ["logo.png", "18 KiB", "image"], ["build", "-", "dir"]]
        plain = Table(header, rows, TableConfig(
            block=Block.bordered("Table"),
            widths=(Length(10), Length(7), Length(6)),
        ))
        tp = headless_render(30, 7, plain)

        selected = plain.with_highlight_symbol("> ").select(1).with_block(Block.bordered("Selected"))
        ts = headless_render(30, 7, selected)

        pct = Table(header, rows, TableConfig(
            block=Block(title="Percent + margin", borders=Borders.ALL),
            widths=(Percentage(50), Percentage(30), Percentage(20)),
            margin=Margin(horizontal=1),
            column_spacing=0,
        ))
        tm = headless_render(30, 7, pct)

        return (
            "<table><tr>"
            f"<td><pre><code>{escape_html(tp)}</code></pre></td>"
            f"<td><pre><code>{escape_html(ts)}</code></pre></td>"
            f"<td><pre><code>{escape_html(tm)}</code></pre></td>"
            "</tr><tr>"
            "<td align=\"center\"><code>Length</code></td>"
            "<td align=\"center\"><code>Highlight</code></td>"
            "<td align=\"center\"><code>Percentage</code></td>"
            "</tr></table>\n\n"
        )
    except Exception as e:
        return f"<p>Snapshot generation failed: {e}</p>\n\n"


def escape_html(s: str) -> str:
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )


def generate_snapshots_md() -> str:
    md = ["# Table Snapshots\n", "Text snapshots rendered headlessly.\n\n"]
    md.append(render_widgets_section())
    return "".join(md)


def inject_into_readme(readme_path: Path, content: str) -> None:
    txt = readme_path.read_text(encoding="utf-8")
    if TEMPLATE_BEGIN in txt and TEMPLATE_END in txt:
        before, rest = txt.split(TEMPLATE_BEGIN, 1)
        _, after = rest.split(TEMPLATE_END, 1)
        new = before + TEMPLATE_BEGIN + "\n\n" + content + "\n" + TEMPLATE_END + after
        readme_path.write_text(new, encoding="utf-8")


def main(argv):
    if len(argv) not in (2, 3):
        print(f"Usage: {argv[0]} <out.md> [readme.md]", file=sys.stderr)
        return 2
    out_md = Path(argv[1])
    content = generate_snapshots_md()
    out_md.write_text(content, encoding="utf-8")
    if len(argv) == 3:
        inject_into_readme(Path(argv[2]), content)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))

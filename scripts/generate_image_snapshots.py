#!/usr/bin/env python3
import sys
from pathlib import Path
from typing import Tuple

# Ensure local src is importable in CI and local runs
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / 'src'))

from PIL import Image, ImageDraw, ImageFont  # type: ignore

# Rough xterm palette for the named colours, indexed by Color value
PALETTE = [
    (20, 20, 20), (0, 0, 0), (205, 49, 49), (13, 188, 121), (229, 229, 16),
    (36, 114, 200), (188, 63, 188), (17, 168, 205), (160, 160, 160), (102, 102, 102),
    (241, 76, 76), (35, 209, 139), (245, 245, 67), (59, 142, 234), (214, 112, 214),
    (41, 184, 219), (229, 229, 229),
]


def font_path() -> str:
    # Prefer env-provided path
    import os
    p = os.getenv('SNAPSHOT_FONT')
    if p and Path(p).exists():
        return p
    # Common system path on Ubuntu
    for c in [
        '/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf',
        '/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf',
        '/usr/share/fonts/TTF/DejaVuSansMono.ttf',
    ]:
        if Path(c).exists():
            return c
    raise FileNotFoundError('Could not find a monospaced TTF font; set SNAPSHOT_FONT to a .ttf')


def cell_rgb(color, default):
    from gridtui.style import decode_color

    if color is None:
        return default
    kind, value = decode_color(color)
    if kind == 'rgb':
        return value
    if kind == 'named' and int(value) != 0:
        return PALETTE[int(value)]
    return default


def draw_buffer_image(buf, out: Path, *, pad: int = 10, bg=(248, 250, 252), fg=(20, 20, 20), size: int = 16) -> None:
    font = ImageFont.truetype(font_path(), size)
    w_char = int(font.getlength('M'))
    h_char = font.getbbox('Mg')[3] - font.getbbox('Mg')[1]
    W = max(1, buf.area.width) * w_char + pad * 2
    H = max(1, buf.area.height) * h_char + pad * 2
    img = Image.new('RGB', (W, H), color=bg)
    draw = ImageDraw.Draw(img)
    for i, cell in enumerate(buf.content):
        x, y = buf.pos_of(i)
        px = pad + (x - buf.area.x) * w_char
        py = pad + (y - buf.area.y) * h_char
        cell_bg = cell_rgb(cell.style.bg, None)
        if cell_bg is not None:
            draw.rectangle((px, py, px + w_char - 1, py + h_char - 1), fill=cell_bg)
        if cell.symbol.strip():
            draw.text((px, py), cell.symbol, font=font, fill=cell_rgb(cell.style.fg, fg))
    out.parent.mkdir(parents=True, exist_ok=True)
    img.save(out)


def render_snapshots() -> Tuple[str, list[Path]]:
    # Import after sys.path tweak
    from gridtui import Block, Color, Length, Percentage, Rect, Style, Table, TableConfig, render

    header = ['Name', 'Size', 'Kind']
    rows = [['notes.md', '4 KiB', 'text'], ['logo.png', '18 KiB', 'image'], ['build', '-', 'dir']]
    shots = {
        'table': Table(header, rows, TableConfig(
            block=Block.bordered('Table'),
            widths=(Length(10), Length(7), Length(6)),
            header_style=Style(fg=Color.Cyan).bold(),
        )),
        'selected': Table(header, rows, TableConfig(
            block=Block.bordered('Selected'),
            widths=(Length(10), Length(7), Length(6)),
            highlight_symbol='> ',
            selected=1,
            highlight_style=Style(fg=Color.Black, bg=Color.LightYellow),
        )),
        'percent': Table(header, rows, TableConfig(
            block=Block.bordered('Percent'),
            widths=(Percentage(50), Percentage(30), Percentage(20)),
            column_spacing=0,
        )),
    }

    assets = []
    lines = ['# UI Snapshots\n', 'A grid of image snapshots rendered in CI.\n\n']
    for name, table in shots.items():
        buf = render(table, Rect(0, 0, 30, 7))
        p = Path(f'docs/assets/snapshots/{name}.png')
        draw_buffer_image(buf, p)
        assets.append(p)

    def cell_img(p: Path, label: str) -> str:
        return f'<td><img src="{p.as_posix()}" alt="{label}" width="320"/></td>'

    row = '<table><tr>' + ''.join(cell_img(p, p.stem) for p in assets) + '</tr>\n'
    row += '<tr>' + ''.join(f'<td align="center"><code>{p.stem}</code></td>' for p in assets) + '</tr></table>\n\n'
    lines.append(row)
    return (''.join(lines), assets)


def inject_into_readme(readme_path: Path, content: str) -> None:
    begin = '<!-- BEGIN: SNAPSHOTS -->'
    end = '<!-- END: SNAPSHOTS -->'
    txt = readme_path.read_text(encoding='utf-8')
    if begin in txt and end in txt:
        before, rest = txt.split(begin, 1)
        _, after = rest.split(end, 1)
        new = before + begin + '\n\n' + content + '\n' + end + after
        readme_path.write_text(new, encoding='utf-8')


def main(argv: list[str]) -> int:
    if len(argv) not in (2, 3):
        print(f'Usage: {argv[0]} <out.md> [readme.md]')
        return 2
    out = Path(argv[1])
    content, assets = render_snapshots()
    out.write_text(content, encoding='utf-8')
    if len(argv) == 3:
        inject_into_readme(Path(argv[2]), content)
    # Print assets for CI logs
    for p in assets:
        print('Wrote', p)
    return 0


if __name__ == '__main__':
    raise SystemExit(main(sys.argv))

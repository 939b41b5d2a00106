import argparse
import logging
import sys
from pathlib import Path

# Make the local package importable without installation.
ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT / "src"))

from citymap import CityMap, JsonMapStore


def load_theme_css(theme_path: Path) -> str:
    """Load a plain CSS theme file."""
    if theme_path.suffix.lower() != ".css":
        raise ValueError(
            f"Unsupported theme extension '{theme_path.suffix}'. Use .css."
        )
    return theme_path.read_text(encoding="utf-8")


def resolve_path(city_map: CityMap, node_ids: list[int]) -> list:
    nodes = city_map.nodes
    missing = [node_id for node_id in node_ids if node_id not in nodes]
    if missing:
        raise ValueError(f"Unknown node id(s) in --path: {missing}")
    return [nodes[node_id] for node_id in node_ids]


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Render a city/route map JSON file to SVG."
    )
    parser.add_argument(
        "input",
        help="Path to the map JSON input.",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Path to output SVG (default: <input_stem>.svg).",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=800,
        help="Canvas width in pixels (default: 800).",
    )
    parser.add_argument(
        "--height",
        type=int,
        help="Canvas height in pixels (default: half the width).",
    )
    parser.add_argument(
        "--path",
        type=int,
        nargs="+",
        metavar="NODE_ID",
        help="Node ids of a path to highlight with a dashed overlay.",
    )
    parser.add_argument(
        "--hit",
        type=float,
        nargs=2,
        metavar=("X", "Y"),
        help="Report the city under the normalized point X Y.",
    )
    parser.add_argument(
        "--theme",
        help="Theme CSS file path. Defaults to bundled theme.",
    )
    parser.add_argument(
        "--no-theme",
        action="store_true",
        help="Disable embedding theme CSS into the SVG.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    input_arg = Path(args.input)
    input_path = input_arg if input_arg.is_absolute() else (ROOT / input_arg)
    if not input_path.exists():
        raise FileNotFoundError(f"Input JSON not found: {input_path}")
    output_path = (
        Path(args.output)
        if args.output
        else input_path.with_name(f"{input_path.stem}.svg")
    )
    if not output_path.is_absolute():
        output_path = ROOT / output_path

    theme_css = None
    if args.theme:
        theme_arg = Path(args.theme)
        theme_path = theme_arg if theme_arg.is_absolute() else (ROOT / theme_arg)
        if not theme_path.exists():
            raise FileNotFoundError(f"Theme file not found: {theme_path}")
        theme_css = load_theme_css(theme_path)

    height = args.height if args.height else args.width // 2
    city_map = CityMap.from_store(
        JsonMapStore(input_path),
        width=args.width,
        height=height,
        embed_theme=not args.no_theme,
        theme_css=theme_css,
    )

    if args.hit:
        hit = city_map.find_nearest((args.hit[0], args.hit[1]))
        if hit is None:
            print(f"No city at ({args.hit[0]}, {args.hit[1]})")
        else:
            print(f"Hit: city {hit.id}" + (f" ({hit.name})" if hit.name else ""))

    if args.path:
        city_map.set_path_overlay(resolve_path(city_map, args.path))

    city_map.write(output_path)
    print(f"Rendered: {output_path}")

if __name__ == "__main__":
    main(sys.argv[1:])

import argparse
import logging
from typing import List, Optional, Tuple

from expedition import settings
from expedition.session import Expedition
from hexworld.biomes import BIOME_PROFILES
from hexworld.hex import Visibility
from hexworld.settings import ConfigurationError, HexagonShape, MapSettings, RectangleShape
from ui.text_view import legend, render_text


def parse_coord(text: str) -> Tuple[int, int]:
    try:
        q, r = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected 'q,r', got '{text}'")
    return q, r


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a hex map and explore it from your home settlement."
    )
    parser.add_argument("--seed", type=int, default=settings.MAP_SEED, help="World seed")
    parser.add_argument("--radius", type=int, default=settings.HEX_MAP_RADIUS, help="Hexagon map radius")
    parser.add_argument("--cols", type=int, help="Use a rectangular map with this many columns")
    parser.add_argument("--rows", type=int, help="Use a rectangular map with this many rows")
    parser.add_argument(
        "--even-rows",
        action="store_true",
        help="Shift even rows instead of odd rows on rectangular maps",
    )
    parser.add_argument("--pois", type=int, default=settings.POI_COUNT, help="Number of points of interest")
    parser.add_argument(
        "--profile",
        choices=sorted(BIOME_PROFILES),
        default=settings.BIOME_PROFILE,
        help="Biome classification profile",
    )
    parser.add_argument("--no-fog", action="store_true", default=settings.DEBUG_NO_FOG, help="Start with every tile explored")
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Print the map as text instead of opening the viewer",
    )
    parser.add_argument(
        "--move",
        type=parse_coord,
        action="append",
        default=[],
        metavar="Q,R",
        help="Move to this coordinate before printing (headless mode, repeatable)",
    )
    parser.add_argument("--verbose", action="store_true", help="Log generation details")
    return parser


def settings_from_args(args: argparse.Namespace) -> MapSettings:
    if args.cols is not None or args.rows is not None:
        shape = RectangleShape(
            cols=args.cols if args.cols is not None else args.rows,
            rows=args.rows if args.rows is not None else args.cols,
            odd_rows_shifted=not args.even_rows,
        )
    else:
        shape = HexagonShape(radius=args.radius)
    return MapSettings(
        seed=args.seed,
        shape=shape,
        profile=args.profile,
        hex_size=float(settings.HEX_SIZE),
        poi_count=args.pois,
        no_fog=args.no_fog,
    )


def summary(expedition: Expedition) -> List[str]:
    hex_map = expedition.map
    explored = len(hex_map.tiles_with(Visibility.EXPLORED))
    visible = len(hex_map.tiles_with(Visibility.VISIBLE))
    return [
        f"Seed {hex_map.seed}: {len(hex_map)} tiles, {len(hex_map.settlements)} settlements",
        f"Home at {expedition.home}, now at {expedition.position}",
        f"Explored {explored}, visible {visible}",
        f"Steps {expedition.steps} ({expedition.distance_km} km), travel cost {expedition.travel_cost}",
    ]


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        expedition = Expedition.start(settings_from_args(args))
    except ConfigurationError as e:
        print(f"Invalid map settings: {e}")
        return 2

    if args.headless:
        for target in args.move:
            if not expedition.move_to(target):
                print(f"Cannot move to {target} from {expedition.position}")
        print(render_text(expedition.map))
        print()
        for line in legend(expedition.map) + summary(expedition):
            print(line)
        return 0

    from ui.map_view import MapView

    view = MapView(expedition)
    position = view.run()
    print(f"Expedition ended at {position}")
    for line in summary(expedition):
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

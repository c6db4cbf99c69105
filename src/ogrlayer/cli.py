import argparse
import sys
import logging
from typing import List, Optional

from ogrlayer.dataset import Dataset
from ogrlayer.errors import GdalError, NullPointerError
from ogrlayer.vector import Layer, LayerCaps

def setup_logging(level: int = logging.INFO) -> None:
    """
    Configures the standard logging format and level for the command-line interface.

    Args:
        level (int): The logging threshold level.
    """
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

def describe_layer(layer: Layer, exact: bool = False) -> List[str]:
    """
    Builds the human-readable summary of a layer.

    Args:
        layer (Layer): The layer to describe, with any filters already installed.
        exact (bool): Forces exact feature count and extent even if the driver has to scan the layer.

    Returns:
        List[str]: Report lines.
    """
    lines = [f"Layer: {layer.name}", f"Geometry type: {layer.geometry_type}"]

    count = layer.feature_count() if exact else layer.try_feature_count()
    lines.append(f"Feature count: {count if count is not None else 'unknown (use --exact)'}")

    extent = layer.get_extent() if exact else layer.try_get_extent()
    if extent is None:
        lines.append("Extent: unknown")
    else:
        lines.append(f"Extent: ({extent.min_x}, {extent.min_y}) - ({extent.max_x}, {extent.max_y})")

    try:
        srs = layer.spatial_ref()
        lines.append(f"Spatial reference: {srs.auth_name}:{srs.auth_code}" if srs.auth_code else "Spatial reference: custom")
    except NullPointerError:
        lines.append("Spatial reference: none")

    lines.append("Fields:")
    for field in layer.defn.fields():
        lines.append(f"  {field.name}: {field.field_type.name} ({field.width}.{field.precision})")

    caps = [cap.token for cap in LayerCaps if layer.has_capability(cap)]
    lines.append(f"Capabilities: {', '.join(caps) if caps else 'none'}")
    return lines

def run_info(
    path: str,
    layer_name: Optional[str] = None,
    where: Optional[str] = None,
    bbox: Optional[List[float]] = None,
    fid: Optional[int] = None,
    exact: bool = False
) -> int:
    """
    Opens a dataset read-only and prints a summary of one layer (or one feature).

    Returns:
        int: Process exit status.
    """
    try:
        with Dataset.open(path) as ds:
            layer = ds.layer_by_name(layer_name) if layer_name else ds.layer(0)

            if fid is not None:
                feature = layer.feature(fid)
                if feature is None:
                    logging.error(f"No feature with id {fid} in layer '{layer.name}'")
                    return 1
                geom = feature.geometry()
                print(f"Feature {feature.fid}")
                for name, value in feature.fields():
                    print(f"  {name} = {value!r}")
                print(f"  geometry = {geom.to_wkt() if geom is not None else None}")
                return 0

            if where:
                layer.set_attribute_filter(where)
            if bbox:
                layer.set_spatial_filter_rect(*bbox)

            for line in describe_layer(layer, exact=exact):
                print(line)
        return 0

    except GdalError as e:
        logging.error(f"Failed to read {path}: {e}")
        return 1

def main(argv: Optional[List[str]] = None) -> None:
    """
    Parses command-line arguments and routes execution to the appropriate subcommand.
    """
    parser = argparse.ArgumentParser(
        prog="ogrlayer",
        description="Inspect vector layers through the ogrlayer wrapper"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    info_parser = subparsers.add_parser(
        "info",
        help="Prints the schema, count, extent and capabilities of a layer."
    )
    info_parser.add_argument("path", help="Path or connection string of the vector dataset.")
    info_parser.add_argument(
        "--layer",
        type=str,
        default=None,
        help="Name of the layer to inspect. Defaults to the first layer."
    )
    info_parser.add_argument(
        "--where",
        type=str,
        default=None,
        help="Attribute filter (SQL WHERE expression) applied before counting."
    )
    info_parser.add_argument(
        "--bbox",
        type=float,
        nargs=4,
        metavar=("MINX", "MINY", "MAXX", "MAXY"),
        default=None,
        help="Spatial filter rectangle applied before counting."
    )
    info_parser.add_argument(
        "--fid",
        type=int,
        default=None,
        help="Print a single feature by id instead of the layer summary."
    )
    info_parser.add_argument(
        "--exact",
        action="store_true",
        help="Compute exact count and extent even if the driver must scan the whole layer."
    )
    info_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging."
    )

    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    if args.command == "info":
        sys.exit(run_info(
            path=args.path,
            layer_name=args.layer,
            where=args.where,
            bbox=args.bbox,
            fid=args.fid,
            exact=args.exact
        ))

if __name__ == "__main__":
    main()

"""
Geomarker CLI - Main entry point.

Runs the marker pipeline on an item file and prints or publishes the
resulting snapshot.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

import yaml

from geomarker_cluster.geometry.shapes import Viewport
from geomarker_service.config import ServiceConfig, ClusteringConfig, MQTTConfig
from geomarker_service.items import load_items
from geomarker_service.service import MarkerService


def load_service_config(args: argparse.Namespace) -> ServiceConfig:
    """
    Build the service configuration from --config plus CLI overrides.

    Args:
        args: Parsed arguments

    Returns:
        ServiceConfig

    Raises:
        FileNotFoundError: If --config points to a missing file
        ValueError: If YAML is invalid or a value fails validation
    """
    if args.config:
        path = Path(args.config)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {args.config}")
        try:
            config = ServiceConfig.from_yaml(path)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {args.config}: {e}")
    else:
        config = ServiceConfig(service_id=args.service_id)

    clustering = config.clustering
    clustering = ClusteringConfig(
        radius_km=args.radius_km if args.radius_km is not None else clustering.radius_km,
        margin_percent=(
            args.margin_percent if args.margin_percent is not None else clustering.margin_percent
        ),
        max_markers=args.max_markers if args.max_markers is not None else clustering.max_markers,
    )

    mqtt_config = config.mqtt_config
    if getattr(args, "broker", None) is not None or getattr(args, "port", None) is not None:
        mqtt_config = MQTTConfig(
            broker=args.broker if args.broker is not None else mqtt_config.broker,
            port=args.port if args.port is not None else mqtt_config.port,
            username=mqtt_config.username,
            password=mqtt_config.password,
            qos=mqtt_config.qos,
            retain=mqtt_config.retain,
            marker_topic=mqtt_config.marker_topic,
        )

    return ServiceConfig(
        service_id=config.service_id,
        clustering=clustering,
        mqtt_config=mqtt_config,
        log_level=args.log_level or config.log_level,
    )


def add_pipeline_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by the cluster and publish commands."""
    parser.add_argument('items', help='Path to items YAML/JSON file')
    parser.add_argument('--lat', type=float, required=True, help='Viewport center latitude')
    parser.add_argument('--lon', type=float, required=True, help='Viewport center longitude')
    parser.add_argument(
        '--lat-delta', type=float, required=True, help='Full visible latitude span (degrees)'
    )
    parser.add_argument(
        '--lon-delta', type=float, required=True, help='Full visible longitude span (degrees)'
    )
    parser.add_argument('--radius-km', type=float, help='Clustering radius (default: 0.5)')
    parser.add_argument('--margin-percent', type=float, help='Viewport margin (default: 20)')
    parser.add_argument('--max-markers', type=int, help='Render cap (default: 50)')


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Geomarker CLI - Cluster geo-tagged items for a map viewport",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print markers for a San Francisco viewport
  geomarker-cli cluster data/items.yaml --lat 37.785 --lon -122.425 \\
      --lat-delta 0.05 --lon-delta 0.05

  # Tighter clusters, no margin
  geomarker-cli cluster data/items.json --lat 0 --lon 0 \\
      --lat-delta 2 --lon-delta 2 --radius-km 0.1 --margin-percent 0

  # Publish the snapshot to MQTT using a service config
  geomarker-cli --config config/service.yaml publish data/items.yaml \\
      --lat 37.785 --lon -122.425 --lat-delta 0.05 --lon-delta 0.05
"""
    )

    # Global arguments
    parser.add_argument('--config', help='Service config YAML')
    parser.add_argument(
        '--service-id',
        default='map_home',
        help='Service ID when no --config is given (default: map_home)'
    )
    parser.add_argument('--log-level', help='Log level (default: INFO)')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    cluster_cmd = subparsers.add_parser('cluster', help='Print marker snapshot as JSON')
    add_pipeline_arguments(cluster_cmd)
    cluster_cmd.add_argument('--indent', type=int, default=2, help='JSON indent (default: 2)')

    publish_cmd = subparsers.add_parser('publish', help='Publish marker snapshot to MQTT')
    add_pipeline_arguments(publish_cmd)
    publish_cmd.add_argument('--broker', help='MQTT broker host')
    publish_cmd.add_argument('--port', type=int, help='MQTT broker port')
    publish_cmd.add_argument(
        '--timeout', type=float, default=10.0, help='Connect timeout in seconds (default: 10)'
    )

    return parser


def run(args: argparse.Namespace) -> int:
    """
    Execute a parsed command.

    Returns:
        Process exit code
    """
    config = load_service_config(args)
    items = load_items(args.items)
    viewport = Viewport(
        latitude=args.lat,
        longitude=args.lon,
        latitude_delta=args.lat_delta,
        longitude_delta=args.lon_delta,
    )

    if args.command == 'cluster':
        service = MarkerService.from_config(config, publish=False)
        message = service.process(items, viewport)
        print(json.dumps(message.to_dict(), indent=args.indent))
        return 0

    service = MarkerService.from_config(config, publish=True)
    if not service.start(timeout=args.timeout):
        print(f"Error: could not connect to {config.mqtt_config.broker}", file=sys.stderr)
        return 1
    try:
        message = service.process(items, viewport)
        stats = service.get_stats()
    finally:
        service.stop()

    if stats['publisher']['message_count'] == 0:
        print("Error: marker snapshot was not published", file=sys.stderr)
        return 1

    print(f"Published {message.marker_count} markers to {config.marker_topic}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        exit_code = run(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == '__main__':
    main()

from __future__ import annotations

import argparse

from wunderground_exporter.main import run


def main() -> None:
    parser = argparse.ArgumentParser(description="Prometheus exporter for Weather Underground PWS observations")
    parser.add_argument("--host", default=None, help="Listen address (default: HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="Listen port (default: PORT or 9122)")
    args = parser.parse_args()

    run(host=args.host, port=args.port)


if __name__ == "__main__":
    main()

import argparse
import json
import logging
import sys

from trilateration.errors import InvalidRequest, TopSecretError
from trilateration.registry import SatelliteRegistry
from trilateration.service import (
    config_from_request, top_secret, top_secret_split, get_top_secret_split,
)

log = logging.getLogger("trilateration.cli")

def run(data: dict, registry: SatelliteRegistry) -> dict:
    # ожидаем формат (пакетный):
    # {
    #   "satellites": [{"name":"kenobi", "distance":927.75, "message":["este","","","mensaje",""]}, ...],
    #   "cfg": {"tolerance": 10.0}
    # }
    # или поштучный:
    # {"split": {"kenobi": {"distance":927.75, "message":[...]}, ...}}
    cfg = config_from_request(data.get("cfg"))

    if "satellites" in data:
        return top_secret(registry, data["satellites"], cfg).to_dict()
    if "split" in data:
        for name, body in data["split"].items():
            top_secret_split(registry, name, body["distance"], body.get("message"))
        return get_top_secret_split(registry, cfg).to_dict()
    raise InvalidRequest("expected 'satellites' or 'split' in request")

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Decode source position and message from satellite readings (JSON on stdin)")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging to stderr")
    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s", stream=sys.stderr)

    try:
        data = json.load(sys.stdin)
        out = json.dumps(run(data, SatelliteRegistry()), ensure_ascii=False, indent=2, allow_nan=False)
    except TopSecretError as e:
        print(json.dumps({"error": str(e)}, ensure_ascii=False))
        return e.exit_code
    except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as e:
        log.debug("Bad request", exc_info=True)
        print(json.dumps({"error": f"invalid request format: {e}"}, ensure_ascii=False))
        return 1

    print(out)
    return 0

if __name__ == "__main__":
    sys.exit(main())

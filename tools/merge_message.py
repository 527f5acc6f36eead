import argparse
import json
import sys
from typing import List

from trilateration.message import merge


def parse_tokens(s: str) -> List[str]:
    # format: "este,,,mensaje," -> ["este", "", "", "mensaje", ""]
    if s == "":
        return []
    return [t.strip() for t in s.split(",")]


def main() -> None:
    ap = argparse.ArgumentParser(description="Recover a message from three redacted copies")
    ap.add_argument("--a", default="", help="e.g. 'este,,,mensaje,'")
    ap.add_argument("--b", default="", help="e.g. ',es,,,secreto'")
    ap.add_argument("--c", default="", help="e.g. 'este,,un,,'")
    args = ap.parse_args()

    res = merge(parse_tokens(args.a), parse_tokens(args.b), parse_tokens(args.c))
    if not isinstance(res, str):
        print(json.dumps({"ok": False, "detail": str(res)}, ensure_ascii=False))
        sys.exit(2)
    print(json.dumps({"ok": True, "message": res}, ensure_ascii=False))


if __name__ == "__main__":
    main()

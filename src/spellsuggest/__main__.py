from __future__ import annotations
import argparse, json, logging, os
from typing import List

from .config import SPELL_THRESHOLD, DEFAULT_MAXIMUM_SUGGESTIONS, Settings
from .DB.bucketed import BucketedBackend
from .DB.dichotomy import DichotomyBackend, write_dichotomy_file
from .DB.hashed import HashedBackend
from .dictionary import DictionaryManager, DictionarySet
from .errors import InvalidWordError
from .loader import read_wordlist
from .models import CostModel, Result
from .phonetic import load_rules

def _stem(path: str) -> str:
    return os.path.splitext(os.path.basename(os.path.normpath(path)))[0]

def _print_table(results: List[Result]) -> None:
    print("#  Dictionary       Cost  Suggestion")
    for r in results:
        if r.is_correct:
            print(f"-  {r.dictionary_name:<16} {'':<5} (correct)")
            continue
        if not r.suggestions:
            print(f"-  {r.dictionary_name:<16} {'':<5} (no suggestions)")
            continue
        for i, s in enumerate(r.suggestions, 1):
            print(f"{i:<2} {r.dictionary_name:<16} {s.cost:<5} {s.word}")

def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Spelling checker CLI")
    p.add_argument("--wordlist", nargs="+", default=[], help="Word lists loaded into memory")
    p.add_argument("--dichotomy", nargs="+", default=[], help="Sorted code*word files")
    p.add_argument("--bucketed", nargs="+", default=[], help="Dictionary dirs with a words/ subfolder")
    p.add_argument("--build-dichotomy", default=None, metavar="OUT",
                   help="Write a dichotomy file from --wordlist and exit")
    p.add_argument("--rules", default=None, help="aspell-style phonetic rule file")
    p.add_argument("--config", default=None, help="key=value settings file")
    p.add_argument("--normalised", action="store_true", help="Lower-case --wordlist words")
    p.add_argument("-k", type=int, default=DEFAULT_MAXIMUM_SUGGESTIONS, help="Max suggestions")
    p.add_argument("--max-cost", type=int, default=None, help="Suggestion cost threshold")
    p.add_argument("--repl", action="store_true", help="Interactive loop after init")
    p.add_argument("--q", default=None, help="Single word to check once")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO)

    rules = load_rules(args.rules)

    if args.build_dichotomy:
        if not args.wordlist:
            p.error("--build-dichotomy requires --wordlist")
        words = (w for path in args.wordlist for w in read_wordlist(path, verbose=args.verbose))
        n = write_dichotomy_file(args.build_dichotomy, words, rules)
        print(f"wrote {n} records to {args.build_dichotomy}")
        return 0

    if not (args.wordlist or args.dichotomy or args.bucketed):
        p.error("at least one of --wordlist, --dichotomy or --bucketed is required")

    settings = Settings.from_file(args.config) if args.config else Settings()
    max_cost = args.max_cost if args.max_cost is not None else settings.get_integer(SPELL_THRESHOLD)

    mgr = DictionaryManager(
        costs=CostModel.from_settings(settings),
        rules=rules,
        maximum_cost=max_cost,
        maximum_suggestions=args.k,
    )
    try:
        for path in args.wordlist:
            mgr.register_backend(_stem(path), path,
                                 HashedBackend.from_file(path, rules=rules, normalised=args.normalised))
        for path in args.dichotomy:
            mgr.register_backend(_stem(path), path, DichotomyBackend.open(path, rules=rules))
        for path in args.bucketed:
            mgr.register_backend(_stem(path), path, BucketedBackend(path, rules=rules))
        dicts: DictionarySet = mgr.dictionary_set()

        def run_query(word: str) -> None:
            try:
                results = dicts.spell_check(word)
            except InvalidWordError as e:
                print(f"error: {e}")
                return
            if args.json:
                print(json.dumps([r.to_dict() for r in results], ensure_ascii=False, indent=2))
            else:
                _print_table(results)

        if args.q:
            run_query(args.q)

        if args.repl:
            print("Type a word (empty line to exit).")
            while True:
                try:
                    q = input("> ").strip()
                except (EOFError, KeyboardInterrupt):
                    break
                if not q:
                    break
                run_query(q)

        return 0
    finally:
        mgr.reset()

if __name__ == "__main__":
    raise SystemExit(main())

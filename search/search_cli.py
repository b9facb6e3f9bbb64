import argparse
import logging
import os
import sys

# Add root directory to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from search.cql_doctor import string_to_cql
from search.ting_search import TingSearchEngine


def run_query(phrase, engine=None):
    """Prints the CQL for a phrase, and the search outcome when an engine is given."""
    if engine is None:
        print(string_to_cql(phrase))
        return

    response, cql, exec_time = engine.search(phrase)
    print(f"CQL: {cql}")
    if response is None:
        print(f"Search failed after {exec_time:.4f} seconds.")
    else:
        print(f"Got {len(response)} bytes in {exec_time:.4f} seconds.")
        print(response)


def main(argv=None):
    """Command-line interface for curing search phrases into CQL."""
    parser = argparse.ArgumentParser(description="Convert search phrases to valid CQL.")
    parser.add_argument('--query', type=str, help="Convert a single phrase and exit.")
    parser.add_argument('--send', action='store_true', help="Also submit the query to the search service.")
    parser.add_argument('--verbose', action='store_true', help="Log debug output.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    engine = TingSearchEngine() if args.send else None
    try:
        if args.query is not None:
            run_query(args.query, engine)
            return

        print("CQL doctor CLI. Enter 'exit' to quit.")
        while True:
            phrase = input("Enter search phrase: ")
            if phrase.lower() == 'exit':
                break

            if not phrase.strip():
                continue

            run_query(phrase, engine)
            print("-" * 15 + "\n")

    finally:
        if engine is not None:
            engine.close()


if __name__ == '__main__':
    main()

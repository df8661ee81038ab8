#!/usr/bin/env python3
"""
Random fuzzer for the attribute scanner.
Generates malformed attribute lists and checks that scanning only ever fails
with a ScanError, that resolving values only fails with EscapeError or
DecodingFault, and that the cursor never moves backwards.
"""

import argparse
import random
import string
import sys
import time
import traceback

from xmlattrs import Attributes, Decoder, DecodingFault, EscapeError, ScanError, ScannerOpts

NAMES = ["id", "class", "href", "xml:lang", "xmlns:x", "data-x", "a", "b", "value", "name"]

ENTITIES = [
    "&amp;", "&lt;", "&gt;", "&quot;", "&apos;", "&nbsp;",
    "&", "&amp", "&#", "&#x", "&#123", "&#x1f;",
    "&#xdeadbeef;", "&#99999999;", "&#-1;", "&#x;", "&unknown;",
    "&#0;", "&#xD800;", "&#x10FFFF;", "&#x110000;",
    "&#" + "0" * 5000 + "65;", "&#" + "9" * 5000 + ";",
]

SPECIAL_BYTES = [b"\x00", b"\xff", b"\xc3", b"\xef\xbb\xbf", b"=", b"'", b'"', b"/", b">", b"<"]


def random_string(min_len=0, max_len=20):
    """Generate random ASCII string."""
    length = random.randint(min_len, max_len)
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))


def random_whitespace():
    ws = [" ", "\t", "\n", "\r", "\f", ""]
    return "".join(random.choices(ws, k=random.randint(0, 4))).encode()


def fuzz_attribute():
    """Generate one possibly malformed attribute."""
    name = random.choice([
        lambda: random.choice(NAMES).encode(),
        lambda: random_string(1, 12).encode(),
        lambda: b"",
        lambda: random.choice(SPECIAL_BYTES),
        lambda: random.choice(NAMES).encode() + random.choice(SPECIAL_BYTES),
    ])()
    value = random.choice([
        lambda: random_string(0, 30).encode(),
        lambda: random.choice(ENTITIES).encode(),
        lambda: random_string(0, 5).encode() + random.choice(SPECIAL_BYTES),
        lambda: "café".encode(random.choice(["utf-8", "latin-1"])),
    ])()
    quote = random.choice([b'"', b"'", b"", b'"', b"'"])
    close = quote if random.random() > 0.1 else b""
    eq = random.choice([b"=", b"=", b" = ", b"", b"=="])
    return random_whitespace() + name + eq + random_whitespace() + quote + value + close


def generate_fuzzed_tag():
    name = random.choice(NAMES).encode()
    attrs = b"".join(fuzz_attribute() for _ in range(random.randint(0, 8)))
    tail = random.choice([b"", b"/", b" ", b" /"])
    return name + b" " + attrs + tail, len(name)


def check_tag(buf, start, check_duplicates):
    scanner = Attributes(buf, start, ScannerOpts(check_duplicates=check_duplicates))
    decoder = Decoder()
    previous = scanner.position
    steps = 0
    while True:
        try:
            attr = next(scanner)
        except StopIteration:
            break
        except ScanError:
            break
        if scanner.position < previous:
            raise AssertionError(f"cursor moved back from {previous} to {scanner.position}")
        if not attr.key:
            raise AssertionError("empty attribute name")
        previous = scanner.position
        try:
            attr.decode_text(decoder)
        except (EscapeError, DecodingFault):
            pass
        steps += 1
        if steps > len(buf):
            raise AssertionError("scanner does not terminate")
    if not scanner.exhausted:
        raise AssertionError("scanner stopped without reaching its terminal state")


def run_fuzzer(num_tests, seed=None, verbose=False):
    """Run the fuzzer against the scanner."""
    if seed is not None:
        random.seed(seed)

    crashes = []
    print(f"Fuzzing attribute scanner with {num_tests} test cases...")
    start_time = time.time()

    for i in range(num_tests):
        buf, start = generate_fuzzed_tag()
        if verbose and i % 1000 == 0:
            print(f"  Test {i}/{num_tests}...")
        for check_duplicates in (True, False):
            try:
                check_tag(buf, start, check_duplicates)
            except Exception as e:
                crashes.append({
                    "test_num": i,
                    "buf": buf,
                    "error": str(e),
                    "traceback": traceback.format_exc(),
                })
                if verbose:
                    print(f"  CRASH: Test {i}: {e}")
                break

    elapsed_total = time.time() - start_time

    print(f"\n{'='*60}")
    print(f"Total tests:    {num_tests}")
    print(f"Crashes:        {len(crashes)}")
    print(f"Total time:     {elapsed_total:.2f}s")

    for crash in crashes[:10]:
        print(f"\nTest #{crash['test_num']}:")
        print(f"  Tag: {crash['buf'][:200]!r}")
        print(f"  Error: {crash['error']}")
        if verbose:
            print(crash["traceback"])

    return not crashes


def main():
    parser = argparse.ArgumentParser(description="Fuzz the attribute scanner with malformed tags")
    parser.add_argument(
        "--num-tests", "-n",
        type=int,
        default=10000,
        help="Number of test cases to generate (default: 10000)",
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--sample",
        type=int,
        metavar="N",
        help="Just print N sample fuzzed tags (no scanning)",
    )

    args = parser.parse_args()

    if args.sample:
        if args.seed:
            random.seed(args.seed)
        for i in range(args.sample):
            print(f"=== Sample {i+1} ===")
            print(generate_fuzzed_tag()[0])
        return

    success = run_fuzzer(args.num_tests, seed=args.seed, verbose=args.verbose)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""Profile the attribute scanner to find performance bottlenecks."""

import cProfile
import io
import pstats

from xmlattrs import Attributes, Decoder

# Sample start tag content (name plus attribute list)
tag = (
    b'entry xml:lang="en" id="e1" class="note important" href="https://example.com/?a=1&amp;b=2" '
    b"title='Bells &amp; whistles' data-count=\"42\" "
    + b" ".join(b'attr%d="value %d"' % (i, i) for i in range(40))
)

decoder = Decoder()

# Profile
pr = cProfile.Profile()
pr.enable()

for _ in range(2000):
    for attr in Attributes(tag, 5):
        _ = attr.decode_text(decoder)

pr.disable()

# Print stats
s = io.StringIO()
ps = pstats.Stats(pr, stream=s).sort_stats("cumulative")
ps.print_stats(30)  # Top 30 functions
print(s.getvalue())

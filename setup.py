"""Optional mypyc build of the scanner hot path.

    XMLATTRS_USE_MYPYC=1 pip install .[mypyc]
"""

import os

from setuptools import setup

ext_modules = []
if os.environ.get("XMLATTRS_USE_MYPYC") == "1":
    from mypyc.build import mypycify

    ext_modules = mypycify(
        ["src/xmlattrs/attributes.py", "src/xmlattrs/escape.py"],
        opt_level=os.environ.get("MYPYC_OPT_LEVEL", "3"),
    )

setup(ext_modules=ext_modules)

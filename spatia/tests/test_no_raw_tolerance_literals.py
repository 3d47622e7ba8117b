"""Library modules must take their tolerances from spatia.core.constants."""
import pathlib
import re

from spatia.core import constants

TOLERANCE_LITERAL = re.compile(r"\b1e-(?:6|12|15)\b")
PACKAGE_ROOT = pathlib.Path(__file__).resolve().parent.parent


def _library_modules():
    for path in sorted(PACKAGE_ROOT.rglob('*.py')):
        if 'tests' in path.parts or path.name == 'constants.py':
            continue
        yield path


def test_tolerance_constants_hold_the_literals():
    assert {constants.EPS_DUPLICATE, constants.EPS_PLANE, constants.EPS_COLINEAR} == {1e-6, 1e-12, 1e-15}


def test_library_modules_use_named_tolerances():
    offenders = []
    for path in _library_modules():
        for lineno, line in enumerate(path.read_text(encoding='utf-8').splitlines(), start=1):
            if TOLERANCE_LITERAL.search(line):
                offenders.append(f"{path.relative_to(PACKAGE_ROOT)}:{lineno}: {line.strip()}")
    assert not offenders, "use spatia.core.constants.EPS_* instead of:\n" + "\n".join(offenders)

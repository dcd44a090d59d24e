"""Basic usage of defacto.

Run with ``defacto examples/basic_usage.py``.
"""

from defacto import THROWS, fact, fact_group, facts, not_


# 1. Define the code under test
def slugify(title: str) -> str:
    return "-".join(title.lower().split())


def is_lowercase(text: str) -> bool:
    return text == text.lower()


# 2. Group facts in a suite
with facts("slugify"):
    fact(lambda: slugify("Hello World"), "hello-world")
    fact(lambda: slugify("Mixed CASE Title"), is_lowercase)
    fact(lambda: slugify(None), THROWS)

    # 3. Label related facts
    with fact_group("whitespace"):
        fact(lambda: slugify("  padded  "), "padded")
        fact(lambda: slugify("a  b"), not_("a--b"))

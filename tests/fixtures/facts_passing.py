from defacto import THROWS, fact, fact_group, facts, not_


def is_even(n):
    return n % 2 == 0


with facts("passing facts"):
    fact(lambda: 1 + 1, 2)
    fact(lambda: 4, is_even)
    fact(lambda: int("x"), THROWS)
    with fact_group("negation"):
        fact(lambda: 3, not_(is_even))
        fact(lambda: 4, not_(5))

from defacto import fact


fact(lambda: 1, 1)

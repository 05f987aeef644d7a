def approximate_integral(start, end, steps: int, number=float):
    """Left Riemann sum of f(x) = x over [start, end].

    `number` converts Python scalars into the arithmetic type under test
    (float, numpy.float32, as_float_value, ...); all arithmetic then runs in
    that type.
    """
    x = number(start)
    end_x = number(end)
    integral = number(0)
    delta = (end_x - x) / number(steps)

    while float(x) < float(end_x):
        integral = integral + x * delta
        x = x + delta

    return integral

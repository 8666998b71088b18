from bartbench.data.errors import InvalidConfigurationError


def assert_min_dimension(p: int, minimum: int) -> None:
    if p < minimum:
        raise InvalidConfigurationError(
            f"Dimensionality p={p} is below the minimum of {minimum} columns read by the signal function."
        )


def assert_positive(name: str, value: float) -> None:
    if not value > 0:
        raise InvalidConfigurationError(f"{name} must be positive; got {value!r}.")


def assert_non_negative(name: str, value: float) -> None:
    if not value >= 0:
        raise InvalidConfigurationError(f"{name} must be non-negative; got {value!r}.")

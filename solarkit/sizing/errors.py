"""Typed failures raised by the estimator."""


class EstimatorError(ValueError):
    """Base class for all estimator input and calculation errors."""


class InvalidLoadInput(EstimatorError):
    """An appliance row or billing sample is negative, non-finite or malformed."""


class InvalidSizingInput(EstimatorError):
    """Target daily energy is negative or non-finite."""


class UnsupportedPanelSpec(EstimatorError):
    """Panel wattage is not one of the configured panel options."""

    def __init__(self, wattage, supported):
        self.wattage = wattage
        self.supported = tuple(supported)
        options = ", ".join(str(w) for w in self.supported)
        super().__init__(f"Unsupported panel wattage {wattage} W (supported: {options})")


class InvalidBillInput(EstimatorError):
    """Monthly bill is negative or non-finite."""


class DivisionUndefined(EstimatorError):
    """A ratio was requested against a non-positive denominator.

    Callers should render the figure as "not calculable".
    """

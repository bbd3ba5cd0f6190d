from typing import Any


class OperationInputBase:
    """ Base class for Operations' Inputs

    Operation's input is basically a parsed argument: filter, sorting, paging
    """

    def export(self) -> Any:
        """ Export the input back into some jsonable value """
        raise NotImplementedError

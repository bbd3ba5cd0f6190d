class BaseMemqlException(Exception):
    pass


class QueryObjectError(BaseMemqlException):
    """ Invalid input provided by the User

    Reported when there's something wrong with the filter, sorting or paging arguments
    """

    def __init__(self, err: str):
        super().__init__(f'Query object error: {err}')


class UnsupportedOperatorError(QueryObjectError):
    """ Filter mentioned an operator that we don't know how to apply

    Only reported in strict mode: see ParserSettings.strict_operators
    """

    def __init__(self, operator: str, field_name: str):
        self.operator = operator
        self.field_name = field_name

        super().__init__(f'Unsupported filter operator "{operator}" for field "{field_name}"')


class InvalidFieldError(BaseMemqlException, KeyError):
    """ Query mentioned an invalid field name

    Reported when a field mentioned by name is not found in the property mapper,
    or on the model that the data is made of
    """

    def __init__(self, model: str, field_name: str, where: str):
        self.model = model
        self.field_name = field_name
        self.where = where

        super().__init__(f'Invalid field "{field_name}" for "{model}" specified in {where}')

    # KeyError would put quotes around the message
    __str__ = BaseMemqlException.__str__


class UnsupportedCoercionError(BaseMemqlException, TypeError):
    """ A filter value cannot be converted to the type of the field it is compared against """

    def __init__(self, value_type: str, field_type: str):
        self.value_type = value_type
        self.field_type = field_type

        super().__init__(f'No explicit conversion from {value_type} to {field_type} exists')


class CountNotSupportedError(BaseMemqlException, NotImplementedError):
    """ The data source cannot be counted without consuming it """

from typing import Union


class ConsoleError(Exception):

    def __init__(self, e=None):
        self.error = e

    def __str__(self):
        out = 'There was an error when interfacing with the school console'
        if self.error is None:
            return out + '.'
        else:
            return f'{out}:\n{self.error}'


class NotConnectedError(ConsoleError):

    def __init__(self):
        super().__init__()

    def __str__(self):
        return 'You must open a session before using this function.'


class AuthenticationError(ConsoleError):

    def __init__(self, msg: str = None):
        super().__init__()
        self.msg = msg

    def __str__(self):
        if self.msg is None:
            return 'The console rejected the supplied credentials.'
        else:
            return self.msg


class InvalidSchoolError(ConsoleError):
    """Used when a school ID is not exactly four digits."""
    def __init__(self, school_id: Union[int, str]):
        super().__init__()
        self.school_id = school_id

    def __str__(self):
        return f'"{self.school_id}" is not a valid school ID. School IDs ' \
               'consist of exactly four digits.'


class OperationError(ConsoleError):

    """
    To be raised when the console rejects a request that would have
    changed its data. The original exception is kept in `error`.
    """

    def __init__(self, operation: str, error: Exception = None):
        super().__init__(error)
        self.operation = operation

    def __str__(self):
        out = f'Could not {self.operation}'
        if self.error is None:
            return out + '.'
        return f'{out}: {self.error}'


class GroupNotFoundError(ConsoleError):

    def __init__(self, group_name: str, school_id: Union[int, str]):
        super().__init__()
        self.group_name = group_name
        self.school_id = school_id

    def __str__(self):
        return f'School {self.school_id} has no group named ' \
               f'"{self.group_name}".'


class ConsoleMalformedResponseException(ConsoleError):

    def __init__(self, payload):
        super().__init__()
        self.payload = payload

    def __str__(self):
        return 'Received a response that could not be read: ' \
               + str(self.payload)[:500]


class EmptySelectionError(ConsoleError):

    """Raised by a chooser when nothing was picked."""

    def __init__(self, label: str = None):
        super().__init__()
        self.label = label

    def __str__(self):
        if self.label is None:
            return 'Nothing was selected.'
        return f'No {self.label} was selected.'

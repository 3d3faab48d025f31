#!/usr/bin/env python3

"""
Stack Emulator

The call stack is not part of system RAM, because there is no specified
location for it, and there is no stack pointer (SP) register exposed to the
running program.  This means we can simply wrap a list to fully (and quickly)
emulate it.  The depth is the list length, so it can never disagree with the
contents.

Exceeding the stack's capacity, or returning with nothing on it, are both fatal
to the running program.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class StackError(Exception):
    pass


class StackOverflowError(StackError):
    pass


class StackUnderflowError(StackError):
    pass


class Stack:
    def __init__(self, size):
        self.items = []
        self.size = size

    def __len__(self):
        return len(self.items)

    def push(self, item):
        # Fetching the stack size with 'len' should be immediate, so no slow loop
        if len(self.items) >= self.size:
            raise StackOverflowError("Stack overflow, more than {} nested calls".format(self.size))

        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackUnderflowError("Stack underflow, return without a call") from None

    def clear(self):
        self.items.clear()

    def get_items(self):
        # For diagnostics
        return self.items

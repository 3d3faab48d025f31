#!/usr/bin/env python3

"""
RAM Emulator

Supports reading and writing of blocks of memory or individual bytes, along
with zeroing of memory blocks.  Used for the 4K system memory, and also as the
backing store for the framebuffer.

Every access is bounds-checked.  Unlike a real machine, stray reads or writes
outside the allocated memory are fatal rather than silently wrapping, as they
mean the running program has lost track of its own addresses.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class RAMError(Exception):
    pass


class MemoryOutOfBoundsError(RAMError):
    def __init__(self, location, mem_size):
        super().__init__("Memory access at 0x{:04x} is outside of the 0x{:04x} byte address space".format(
            location, mem_size
        ))
        self.location = location


class RAM:
    def __init__(self, mem_size=0):
        self.resize(mem_size)

    def resize(self, mem_size):
        self.mem = memoryview(bytearray(b"\x00" * mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size

    def read(self, location):
        self.check_bounds(location)
        return self.mem[location]

    def read_block(self, location, size=1):
        self.check_range(location, size)
        return self.mem[location:location + size]

    def write(self, location, byte):
        self.check_bounds(location)
        self.mem[location] = byte

    def write_block(self, location, block):
        block_size = len(block)
        self.check_range(location, block_size)
        self.mem[location:location + block_size] = block

    def check_bounds(self, location):
        if location < 0 or location > self.mem_top:
            raise MemoryOutOfBoundsError(location, self.mem_size)

    def check_range(self, location, size):
        # Empty ranges touch nothing, so are never checked
        if size > 0:
            self.check_bounds(location)
            self.check_bounds(location + size - 1)

    def zero_block(self, offset, size):
        self.check_range(offset, size)
        self.mem[offset:offset + size] = bytes(size)

    def clear(self):
        self.zero_block(0, self.mem_size)

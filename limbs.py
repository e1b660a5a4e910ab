import logging

import numpy as np

logger = logging.getLogger(__name__)

class BigIntError(Exception):
    pass

class AllocationFailure(BigIntError, MemoryError):
    '''Limb storage could not be obtained from the array library.'''

def ceil_exp_2(data):
    return 1 << (int(data) - 1).bit_length()

def default_namespace():
    return np

class Limbs:
    '''Resizable uint64 limb storage, least significant limb first.

    storage is the allocated array, capacity its length; only the first
    size limbs are part of the value. Each Limbs owns its storage: copying
    one with Limbs(other) allocates.'''
    def __init__(self, data=None, *, size=0, xp=None):
        if type(data) is Limbs:
            self.xp = data.xp
            self.storage = self._alloc(data.size)
            self.capacity = self.size = data.size
            if self.size:
                self.storage[:self.size] = data.data
        elif data is not None:
            if xp is None:
                xp = data.__array_namespace__()
            self.xp = xp
            # the initial data must already be an ndarray of integers
            if not xp.isdtype(data.dtype, 'integral'):
                raise TypeError(data.dtype)
            self.capacity = self.size = data.shape[-1]
            self.storage = self._alloc(self.capacity)
            if self.size:
                self.storage[:] = xp.astype(data, xp.uint64)
        else:
            if xp is None:
                xp = default_namespace()
            self.xp = xp
            self.capacity = size
            self.storage = self._alloc(size)
            self.size = size

    @property
    def data(self):
        return self.storage[:self.size]

    def __len__(self):
        return self.size
    def __getitem__(self, idx):
        return int(self.storage[idx])
    def __setitem__(self, idx, value):
        self.storage[idx] = value
    def __iter__(self):
        for idx in range(self.size):
            yield self[idx]
    def __repr__(self):
        return 'Limbs([' + ', '.join(f'0x{limb:016X}' for limb in self) + '])'

    def _alloc(self, capacity):
        xp = self.xp
        try:
            return xp.empty((capacity,), dtype=xp.uint64)
        except MemoryError as e:
            raise AllocationFailure(f'could not allocate {capacity} limbs') from e

    def reserve(self, size):
        '''Make room for size limbs without changing the value.
        Anything that can fail happens here, before callers mutate limbs.'''
        if size <= self.capacity:
            return
        capacity = ceil_exp_2(size)
        storage = self._alloc(capacity)
        logger.debug('limb storage %d -> %d', self.capacity, capacity)
        if self.size:
            storage[:self.size] = self.data
        self.storage = storage
        self.capacity = capacity

    def resize(self, size, fill=0):
        self.reserve(size)
        if size > self.size:
            self.storage[self.size:size] = fill
        self.size = size

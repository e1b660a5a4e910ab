# NOTE: LIMBS are the mp term for WORDS. They mean basically the same thing.
# These routines work on Limbs buffers one limb at a time, through python ints,
# so carries never depend on how the array library treats uint64 overflow.

WANT_ASSERT = True
LIMB_BITS = 64
NAIL_BITS = 0
NUMB_BITS = LIMB_BITS - NAIL_BITS
NUMB_MASK = ((1<<LIMB_BITS)-1) >> NAIL_BITS
NUMB_MAX = NUMB_MASK

def FILL_LIMB(sign):
    '''The limb that repeats forever above the stored ones.'''
    return NUMB_MAX if sign else 0

def limb_at(p, idx, fill):
    return p[idx] if idx < p.size else fill

if WANT_ASSERT:
    def CHECK_FORMAT(p, sign):
        '''Canonical form: the top limb, if any, is not the fill limb.'''
        assert p.size == 0 or p[p.size - 1] != FILL_LIMB(sign)
        assert p.capacity >= p.size
else:
    def CHECK_FORMAT(p, sign):
        pass

def com(d, s, n):
    __d = d.storage
    __s = s.storage
    __n = n
    if __n > 0:
        __d[:__n] = __s[:__n] ^ NUMB_MASK

def add_n(rp, up, ufill, vp, vfill, n):
    '''{rp,n} = {up,n} + {vp,n}, missing high limbs read as the fill limb.
    Returns the carry out of the top limb.'''
    cy = 0
    for idx in range(n):
        __x = limb_at(up, idx, ufill) + limb_at(vp, idx, vfill) + cy
        rp[idx] = __x & NUMB_MASK
        cy = __x >> NUMB_BITS
    return cy

def sub_n(rp, up, ufill, vp, vfill, n):
    '''{rp,n} = {up,n} - {vp,n}. Returns the borrow out of the top limb.'''
    bw = 0
    for idx in range(n):
        __x = limb_at(up, idx, ufill) - limb_at(vp, idx, vfill) - bw
        rp[idx] = __x & NUMB_MASK
        bw = 1 if __x < 0 else 0
    return bw

def add_1(rp, up, n, incr):
    '''{rp,n} = {up,n} + incr, stopping at the first limb that doesn't
    overflow. Returns the index it stopped at, or n when the carry left the top.'''
    assert incr <= NUMB_MAX
    for idx in range(n):
        __x = up[idx] + incr
        rp[idx] = __x & NUMB_MASK
        if (__x >> NUMB_BITS) == 0:
            return idx
        incr = 1
    return n

def divrem_1(qp, up, n, d):
    '''{qp,n} = {up,n} // d for a single limb divisor. Returns the remainder.
    The remainder of each limb is carried down into the next lower one;
    python ints are the double width intermediate.'''
    assert 0 < d <= NUMB_MAX
    r = 0
    for idx in range(n - 1, -1, -1):
        __x = (r << NUMB_BITS) | up[idx]
        qp[idx] = __x // d
        r = __x % d
    return r

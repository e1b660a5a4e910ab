# representation:
#  2s complement over a variable number of uint64 limbs, least significant first
#  the sign is not stored in the top limb. it is the value of every bit above
#    the stored limbs, forever: zeros for nonnegative values, ones for negative.
#  canonical form: the top limb is never the fill limb. that leaves 0 and -1
#    with no limbs at all.
#  arithmetic runs to the length of the longer operand, then either grows by
#    one limb when same-signed operands overflow, or shrinks when opposite
#    signs cancel.

import logging
import operator

import mpn
from limbs import AllocationFailure, BigIntError, Limbs

logger = logging.getLogger(__name__)

__all__ = [
    "AllocationFailure",
    "BigInt",
    "BigIntError",
    "PrecisionOverflow",
]

class PrecisionOverflow(BigIntError, OverflowError):
    '''The value needs more bits than the fixed width integer holds.'''

# fixed width integers are one bit wider than a limb, so any single limb
# together with its sign round trips.
FIXED_WIDTH_BITS = mpn.NUMB_BITS + 1
FIXED_WIDTH_MIN = -(1 << mpn.NUMB_BITS)
FIXED_WIDTH_MAX = (1 << mpn.NUMB_BITS) - 1

HEX_DIGITS = '0123456789ABCDEF'
DEC_DIGITS = '0123456789'

class BigInt:
    def __init__(self, data=None, sign=False, *, xp=None):
        if type(data) is BigInt:
            self._limbs = Limbs(data._limbs)
            self._sign = data._sign
        else:
            if type(data) is not Limbs:
                data = Limbs(data, xp=xp)
            self._limbs = data
            self._sign = bool(sign)
            self.shrink()
        mpn.CHECK_FORMAT(self._limbs, self._sign)

    @classmethod
    def _wrap(cls, limbs, sign):
        # takes ownership of limbs as they are; callers canonicalize
        x = cls.__new__(cls)
        x._limbs = limbs
        x._sign = sign
        return x

    @classmethod
    def zero(cls, *, xp=None):
        return cls(xp=xp)
    @classmethod
    def minus_one(cls, *, xp=None):
        return cls(sign=True, xp=xp)

    @classmethod
    def from_fixed_width(cls, value, *, xp=None):
        value = operator.index(value)
        if not FIXED_WIDTH_MIN <= value <= FIXED_WIDTH_MAX:
            raise PrecisionOverflow(f'{value} does not fit in {FIXED_WIDTH_BITS} bits')
        limbs = Limbs(size=1, xp=xp)
        limbs[0] = value & mpn.NUMB_MASK
        return cls(limbs, value < 0)

    @classmethod
    def from_int(cls, value, *, xp=None):
        value = operator.index(value)
        words = []
        rest = value
        while rest != 0 and rest != -1:
            words.append(rest & mpn.NUMB_MASK)
            rest >>= mpn.NUMB_BITS
        limbs = Limbs(size=len(words), xp=xp)
        for idx, word in enumerate(words):
            limbs[idx] = word
        return cls(limbs, value < 0)

    def to_fixed_width(x):
        if len(x) > 1:
            raise PrecisionOverflow(f'{len(x)} limbs do not fit in {FIXED_WIDTH_BITS} bits')
        value = x._limbs[0] if len(x) else x._fill()
        if x._sign:
            value -= 1 << mpn.NUMB_BITS
        return value

    def __int__(x):
        accum = 0
        for limb in reversed(x.limbs):
            accum <<= mpn.NUMB_BITS
            accum |= limb
        if x._sign:
            accum -= 1 << (mpn.NUMB_BITS * len(x))
        return accum

    @property
    def xp(self):
        return self._limbs.xp
    @property
    def sign(self):
        return self._sign
    @property
    def limbs(self):
        return tuple(self._limbs)
    def __len__(self):
        return len(self._limbs)

    def _fill(self):
        return mpn.FILL_LIMB(self._sign)

    def is_zero(x):
        return len(x) == 0 and not x._sign

    def grow(self):
        '''Append one fill limb. The value is unchanged until the caller
        overwrites it.'''
        self._limbs.resize(len(self) + 1, self._fill())
        logger.debug('grew to %d limbs', len(self))

    def shrink(self):
        '''Drop high limbs that only repeat the fill.'''
        removable = self._fill()
        size = len(self)
        while size > 0 and self._limbs[size - 1] == removable:
            size -= 1
        if size != len(self):
            logger.debug('shrank %d -> %d limbs', len(self), size)
            self._limbs.resize(size)

    def bitwise_not(self):
        self._sign = not self._sign
        mpn.com(self._limbs, self._limbs, len(self))
        mpn.CHECK_FORMAT(self._limbs, self._sign)
        return self

    def inc(self):
        size = len(self)
        # the carry may need one more limb; get it before touching any
        self._limbs.reserve(size + 1)
        stop = mpn.add_1(self._limbs, self._limbs, size, 1)
        if stop < size:
            if self._sign:
                self.shrink()
        elif self._sign:
            # carried into the ones above, which all flip to zero
            self._sign = False
            self.shrink()
        else:
            self.grow()
            self._limbs[size] = 1
        mpn.CHECK_FORMAT(self._limbs, self._sign)
        return self

    def neg(self):
        self._limbs.reserve(len(self) + 1)
        self.bitwise_not()
        return self.inc()

    def add(a, b):
        if len(a) > len(b):
            a, b = b, a
        size = len(b)
        a_fill = a._fill()
        sum_limbs = Limbs(size=size, xp=a.xp)
        cy = mpn.add_n(sum_limbs, a._limbs, a_fill, b._limbs, b._fill(), size)

        s = BigInt._wrap(sum_limbs, a._sign)
        if a._sign == b._sign:
            if int(a._sign) != cy:
                s.grow()
                s._limbs[size] = a_fill ^ 1
        else:
            s._sign = cy == 0
            s.shrink()
        mpn.CHECK_FORMAT(s._limbs, s._sign)
        return s

    def sub(a, b):
        size = max(len(a), len(b))
        a_fill = a._fill()
        diff_limbs = Limbs(size=size, xp=a.xp)
        bw = mpn.sub_n(diff_limbs, a._limbs, a_fill, b._limbs, b._fill(), size)

        # the mirror of add: equal signs can only cancel, mixed signs can overflow
        d = BigInt._wrap(diff_limbs, a._sign)
        if a._sign == b._sign:
            d._sign = bw == 1
            d.shrink()
        elif int(a._sign) == bw:
            d.grow()
            d._limbs[size] = a_fill ^ 1
        else:
            d.shrink()
        mpn.CHECK_FORMAT(d._limbs, d._sign)
        return d

    def _coerce(a, b):
        if type(b) is BigInt:
            return b
        return BigInt.from_int(b, xp=a.xp)

    def __add__(a, b):
        return a.add(a._coerce(b))
    def __radd__(a, b):
        return a._coerce(b).add(a)
    def __sub__(a, b):
        return a.sub(a._coerce(b))
    def __rsub__(a, b):
        return a._coerce(b).sub(a)
    def __neg__(x):
        return BigInt(x).neg()
    def __invert__(x):
        return BigInt(x).bitwise_not()

    def __eq__(a, b):
        if type(b) is not BigInt:
            if isinstance(b, int):
                return int(a) == b
            return NotImplemented
        return a._sign == b._sign and a.limbs == b.limbs

    def to_hex(x):
        if x.is_zero():
            return '0'
        digits = []
        if x._sign:
            x = -x
            digits.append('-')
        leading = True
        for idx in range(len(x) - 1, -1, -1):
            limb = x._limbs[idx]
            for shift in range(mpn.NUMB_BITS - 4, -4, -4):
                nibble = (limb >> shift) & 0xF
                if leading and nibble == 0:
                    continue
                leading = False
                digits.append(HEX_DIGITS[nibble])
        return ''.join(digits)

    def to_decimal(x):
        if x.is_zero():
            return '0'
        negative = x._sign
        x = BigInt(x)
        if negative:
            x.neg()
        digits = []
        while not x.is_zero():
            r = mpn.divrem_1(x._limbs, x._limbs, len(x), 10)
            x.shrink()
            digits.append(DEC_DIGITS[r])
        if negative:
            digits.append('-')
        return ''.join(reversed(digits))

    def limbs_hex(x):
        '''The stored limbs, most significant first, as fixed width hex.'''
        return ' '.join(f'{limb:016X}' for limb in reversed(x.limbs))

    def __str__(self):
        return self.to_decimal()
    def __repr__(self):
        return 'BigInt([' + ', '.join(f'0x{limb:016X}' for limb in self.limbs) + f'], sign={self._sign})'

if __name__ == '__main__':
    a = BigInt.from_fixed_width(FIXED_WIDTH_MIN)
    b = BigInt.from_fixed_width(-1)
    s = a + b
    print(s.limbs_hex())
    assert len(s) == 2 and int(s) == FIXED_WIDTH_MIN - 1

    d = BigInt.from_fixed_width(1) - BigInt.from_fixed_width(234)
    print(d)
    assert str(d) == '-233'

    value = BigInt.zero()
    for idx in range(128):
        value.inc()
    print(value.to_hex(), value)
    assert int(value) == 128

"""Symmetry classes of binary words under reversal and complement.

Reversal and complement both preserve the maximum subword occurrence
count, so searches only visit the numerically smallest member of each
class ("primitive" words). Complement never fixes a word, so a class has
2 or 4 members; the multiplicity returned here is half the class size,
i.e. the number of class members starting with 0.
"""
from .words import reverse_bits


def symmetry_multiplicity(bits, n):
    """0 if not primitive, 1 if fixed by (complemented) reversal, else 2."""
    mask = (1 << n) - 1
    bits &= mask
    rev = reverse_bits(bits, n)
    comp_rev = ~rev & mask
    if bits > min(rev, ~bits & mask, comp_rev):
        return 0
    if bits == rev or bits == comp_rev:
        return 1
    return 2


def is_primitive(bits, n):
    return symmetry_multiplicity(bits, n) > 0


def class_size(bits, n):
    """Number of distinct words obtained by reversal and/or complement."""
    mask = (1 << n) - 1
    bits &= mask
    rev = reverse_bits(bits, n)
    return len({bits, rev, ~bits & mask, ~rev & mask})

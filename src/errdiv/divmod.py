# SPDX-License-Identifier: LGPL-3-or-later

# this is a POWER ISA 3.0B compatible *signed* div function
# however it is also the c, c++, rust, java *and* x86 way of doing things
def trunc_divs(n, d):
    abs_q = abs(n) // abs(d)
    if (n < 0) == (d < 0):
        return abs_q
    return -abs_q


# this is a POWER ISA 3.0B compatible *signed* mod / remainder function
# however it is also the c, c++, rust, java *and* x86 way of doing things.
# the result always has the sign of `n` (or is zero).
def trunc_rems(n, d):
    return n - d * trunc_divs(n, d)

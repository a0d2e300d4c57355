"""
Kernel layer.

`src/kernels/python/` contains the pricing kernels: small pure functions with
explicit rounding rules that the core layer validates inputs for and wires
into pool state.
"""

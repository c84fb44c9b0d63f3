"""
gravstream: 2D N-body gravity rendered as a streaming video.

A handful of equal-mass particles attract each other, every tick is
rasterized into a palette image, and the encoded images are piped into an
external video encoder whose output is streamed to a client.

Pipeline per tick:
- Render the current particle snapshot into a palette frame
- Encode the frame (PNG or JPEG) and append it to the sink
- Accumulate pairwise forces against the pre-step snapshot
- Integrate (leapfrog or symplectic Euler) into a new snapshot

The loop stops when it is cancelled or when the sink stops accepting bytes.
"""

__version__ = "0.1.0"

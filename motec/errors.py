
# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

class LDError(Exception):
    pass

# Structural errors.  These abort the whole decode since any pointer
# past the failure point can no longer be trusted.

class TruncatedRecordError(LDError):
    def __init__(self, what, offset, size, buflen):
        super().__init__('%s at offset %d needs %d bytes, buffer has %d'
                         % (what, offset, size, buflen))
        self.offset = offset
        self.size = size

class CorruptChannelListError(LDError):
    pass

# Per channel errors.  The channel metadata stays usable.

class UnsupportedTypeError(LDError):
    pass

class InvalidChannelError(LDError):
    pass

# Per request errors.

class LapOutOfRangeError(LDError):
    pass

class SidecarError(LDError):
    pass


# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

"""
按时间有序的 UUID（version 7 布局）。

Order / OrderItem 用它做主键：前 48 位是毫秒时间戳，
按主键排序即按创建时间排序。
"""

import os
import time
import uuid


def new_time_ordered_uuid() -> uuid.UUID:
    unix_ms = time.time_ns() // 1_000_000
    rand = int.from_bytes(os.urandom(10), 'big')

    value = (unix_ms & ((1 << 48) - 1)) << 80
    value |= 0x7 << 76                              # version 7
    value |= ((rand >> 62) & 0xFFF) << 64           # rand_a, 12 bits
    value |= 0b10 << 62                             # RFC 4122 variant
    value |= rand & ((1 << 62) - 1)                 # rand_b, 62 bits
    return uuid.UUID(int=value)

# avrowire

A small, dependency-free writer for the Avro binary encoding. It collects
encoded values in an in-memory buffer and hands them to any object with a
`write` method when you flush.

## Installation

```
pip install avrowire
```

## Usage

```python
import io
from avrowire.writer import Writer

out = io.BytesIO()
w = Writer(out, 128)

w.write_bool(True)       # b"\x01"
w.write_int(27)          # zig-zag varint: b"\x36"
w.write_long(-1)         # b"\x01"
w.write_float(1.15)      # 4 bytes, little endian
w.write_double(1.15)     # 8 bytes, little endian
w.write_string("foo")    # length prefix then UTF-8 bytes
w.write_bytes(b"\x03\xff")
w.write(b"raw")          # appended as is

w.flush()
print(out.getvalue())
```

`Writer(out=None, buf_size=0, disable_block_size_header=False)`:

- `out` is any object with a `write(bytes)` method, or `None` to only buffer.
- `buf_size` is a capacity hint; a negative value raises `ValueError`.

`write_int` accepts values in the signed 32-bit range and `write_long` in the
signed 64-bit range; values outside raise `OverflowError`.

### Blocks

Arrays and maps are written as blocks. `write_block_header(length, size)`
writes the negated item count followed by the byte size when `size` is
greater than zero, or just the count otherwise. `write_block_cb(callback)`
runs a callback that writes the block's items and returns how many it wrote;
the header is then placed in front of them with that count and their size,
and the count is returned:

```python
w = Writer(None, 50)

def items(writer):
    writer.write_string("foo")
    writer.write_string("avro")
    return 2

w.write_block_cb(items)
print(w.buffer())  # b"\x03\x12\x06foo\x08avro"
```

Pass `disable_block_size_header=True` to the `Writer` to always write just
the item count.

### Flushing and errors

- `buffered()` gives the number of bytes waiting; `buffer()` gives a copy of
  them.
- `flush()` writes the buffer to the attached output and clears it. With no
  output attached it does nothing and keeps the buffer.
- If the output's `write` returns a count smaller than the data offered,
  `flush()` raises `ShortWriteError` (a subclass of `OSError`). A `None`
  return is taken as a full write.
- Any error raised during a flush is remembered on the writer's `error`
  attribute and raised again by later flushes.
- `reset(out)` attaches a new output and discards buffered bytes.

## What it does not do

The package only writes the primitive pieces of the binary encoding. It does
not parse schemas, encode values against a schema, read or decode Avro data,
or write Avro container files.
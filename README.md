# solidsnake

Building blocks for a small Python-like language and the register virtual
machine that runs it:

- **Indentation preprocessing** (`solidsnake.preprocessor`): turns significant
  whitespace into explicit `<<INDENT>>` / `<<DEDENT>>` marker lines and keeps a
  per-character map from the transformed text back to the input source.
- **Diagnostics** (`solidsnake.diagnostics`): `Span`, `CompileError`,
  `MixedIndentationError` and the `CompileErrors` collection.
- **Tokens and lexing** (`solidsnake.tokens`, `solidsnake.lexer`): token kinds,
  spanned tokens with zero-based line and column, and lexing errors.
- **Token streams** (`solidsnake.token_stream`): a cursor over tokens with
  peek, expect and save/restore backtracking.
- **Bytecode argument codec** (`solidsnake.codec`): parses textual instruction
  operands (registers, integers in decimal/hex/binary/octal, floats) and
  encodes and decodes them big-endian.
- **VM error types** (`solidsnake.vm_errors`): `VmExecutionError` and its
  subclasses, plus the `VmErrorCode` enumeration.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

### Preprocessing indentation

```python
from solidsnake.preprocessor import preprocess_indentation

result = preprocess_indentation("if x:\n    y = 42\n")
print(result.transformed)
# if x:
# <<INDENT>>
# y = 42
# <<DEDENT>>

start = result.transformed.find("42")
print(result.map_span_back(start, start + 2))  # (10, 12): offsets into the input
```

Blank lines and comment-only lines pass through unchanged. Marker characters
map to `None`, so `map_span_back` returns `None` for spans that start or end
inside a marker. Mixing tabs and spaces in indentation raises `CompileErrors`,
which can be iterated to inspect each `MixedIndentationError`.

### Lexing

```python
from solidsnake.lexer import lex

for item in lex("let x = 1 + 2"):
    print(item)
```

`lex` returns a list in which each entry is either a `Spanned` token or a
`LexingError`, so one bad character does not stop the rest of the input from
being tokenized. Unterminated strings are reported with
`LexingErrorKind.INVALID_STRING`, unrecognised characters with
`LexingErrorKind.UNKNOWN`.

### Token streams

```python
from solidsnake.token_stream import TokenStream
from solidsnake.tokens import Token, TokenKind

stream = TokenStream.from_source("let x = 5")
mark = stream.save()
first = stream.next()
stream.restore(mark)
stream.expect(Token(TokenKind.LET))
```

`TokenStream.from_source` raises the first `LexingError` it meets.
`TokenStream.expect` raises `UnexpectedTokenError` on a mismatch and
`EndOfStreamError` when no tokens are left; both derive from `StreamError`.

### Encoding instruction arguments

```python
from solidsnake.codec import ArgType, decode_args, encode_args_from_strs

types = [ArgType.REGISTER, ArgType.U64]
data = encode_args_from_strs(types, ["R1", "0x10"])
print(decode_args(types, data))  # (RegisterType(index=1), 16)
```

Bad registers, bad literals and wrong argument counts raise
`InvalidRegisterError`, `InvalidArgumentError` and `WrongArgumentCountError`,
all subclasses of `VmParseError`. `read_be` and `read_le` read one value from
the start of a byte string; `args_size` gives the encoded size of a list of
operand types.

## What this package does not do

It has no parser that builds a syntax tree, no code generator, no assembler
for whole programs, no interpreter that executes bytecode, and no command-line
tool. The VM error classes and codes are provided for use by such components
but nothing in the package raises them.
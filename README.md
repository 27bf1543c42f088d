# wyrmc

`wyrmc` is a toolkit for Wyrm, a small statically typed language. It covers
each stage from source text to running bytecode:

- **Tokens and lexing**: `wyrmc.lexer.Lexer` scans source text into
  `wyrmc.tokens.Token` values (kind, lexeme, zero-based line and column).
  `Lexer.next_token()` returns one token at a time. `Lexer.tokens()`, and
  iterating over the lexer, yield every token up to and including `EOF`.
  `describe_token_type` gives a readable name for a `TokenType`.
- **Parsing**: `wyrmc.parser.Parser` is a recursive-descent parser with a
  Pratt expression parser. It builds the node classes in `wyrmc.ast`, such as
  `FuncDecl`, `VarDecl`, `BlockExit`, `IfExpr`, `BinaryOp`, `Call`, `Lambda`
  and `BasicType`. Syntax errors go into the parser's `diagnostics` and do
  not raise. `format_ast` and `print_ast` render a tree with box-drawing
  guides and ANSI colours.
- **Scopes**: `wyrmc.symtable.Scope` holds `Symbol`s. `lookup` searches the
  enclosing scopes and `lookup_current` searches only the current one.
  `add_symbol` returns `None` when the name is already declared in that scope.
- **Semantic analysis**: `wyrmc.semantic.resolve_names` declares top-level
  `const` and `func` declarations. `type_check` then checks statements and
  expressions. It covers literals, identifiers, arithmetic and comparison
  operators, `if` expressions, blocks and calls. `type_equals` compares type
  nodes, and a missing type matches any type.
- **Diagnostics**: `wyrmc.diagnostics.Diagnostics` collects up to 255 errors
  and up to 255 warnings. `format_errors` renders all warnings first, then
  all errors. Each entry shows the file name, line and column, the source
  line, and a row of carets under the cause. `print_errors` writes that text
  to standard output.
- **Code generation**: `wyrmc.codegen.generate_bytecode` lowers a checked
  program to a `wyrmc.chunk.Chunk`, which holds bytecode and a table of
  32-bit integer constants. The first instruction is a call to the function
  named `main`.
- **Disassembly and execution**: `wyrmc.debug.disassemble_chunk` returns a
  listing of a chunk's instructions with their offsets and jump targets.
  `wyrmc.vm.VM` runs a chunk on a value stack of at most 256 entries and
  returns an `InterpretResult`. On `RETURN` it writes the popped value to its
  output stream. Stack overflow, stack underflow and bad local slots raise
  `VMStackError`.

## Example

```python
from wyrmc.ast import Program
from wyrmc.codegen import generate_bytecode
from wyrmc.debug import disassemble_chunk
from wyrmc.parser import Parser
from wyrmc.semantic import resolve_names, type_check
from wyrmc.symtable import Scope
from wyrmc.tokens import TokenType
from wyrmc.vm import VM

source = "func main() { let x = 1 + 2; return x; }"

parser = Parser(source)
stmts = []
while parser.lookahead().type is not TokenType.EOF:
    stmts.append(parser.parse_statement())
program = Program(stmts)

diagnostics = parser.diagnostics
scope = Scope()
resolve_names(program, scope, diagnostics)
type_check(program, scope, diagnostics)

if diagnostics.errors_count():
    diagnostics.print_errors()
else:
    chunk = generate_bytecode(program, scope, diagnostics)
    print(disassemble_chunk(chunk, "Generated Bytecode"), end="")
    VM().evaluate(chunk)   # prints 3
```

The parser has no method that parses a whole file. A program is built by
calling `parse_statement` until the next token is `EOF`, as shown above.

## Command-line argument parsing

`wyrmc.cli` provides the pieces of a subcommand-style front end. `Subcommand`
takes a name, a description and an exact number of positional arguments.
`add_flag` registers the flags that the subcommand accepts.
`ArgsParser(argv)` takes a list whose first item is the program name. The
following methods can be chained:

- `set_description`
- `set_help_message`
- `add_subcommand`

`parse()` returns an `ArgsInfo` holding the subcommand, flags and args. It
raises `CliError` if the command is missing, if a subcommand or flag is
unknown, or if the number of arguments is wrong. `format_cli_error` renders
such a message with the red `[Error]` prefix. `format_help` and `print_help`
produce the usage text.

## Running a directory of Wyrm programs

`wyrmc-runner` runs every `.wr` file in a directory through a compiler
executable and checks each exit status:

```
wyrmc-runner path/to/wyrm-tests
```

The runner works as follows:

- It searches the directory recursively for `.wr` files.
- For each file it runs `./bin/wyrm build <file>` in a shell, from the
  current working directory.
- It writes the standard output, with ANSI escape sequences removed, to a
  `.txt` file next to the source.
- A file whose path contains `error` is expected to exit with a non-zero
  status. Any other file is expected to exit with status 0. Each mismatch is
  reported.

At the end the runner prints how many files passed and how many failed. It
exits with status 1 in two cases: when it is not given exactly one argument,
or when that argument is not a directory. The same helpers are available as
`wyrmc.runner.execute_command`, `strip_ansi` and `fetch_test_files`.

## What this package does not do

- It does not install a `wyrm` command. Nothing here reads a `.wr` file and
  compiles it from the command line. `wyrmc-runner` expects a separate
  executable at `./bin/wyrm`.
- Code generation handles a subset of the language:
  - integer and boolean literals (both `true` and `false` become the
    constant 1)
  - `+`, `-`, `==`, `<`, `<=`, `>` and `>=`
  - local variables, blocks and `if` expressions

  Other constructs are reported as errors in the diagnostics. A `return`
  statement emits only a `RETURN` instruction. It does not evaluate its
  expression.
- Jump and call instructions hold a forward 16-bit offset, so the VM does
  not jump backwards.

## Installation

```
pip install .
```

The package has no runtime dependencies beyond the Python standard library.
It requires Python 3.10 or newer.

## Running the tests

```
pip install ".[test]"
pytest
```
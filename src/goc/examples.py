"""
Example unit used by the demo script and the tests.

Exercises every supported construct: file doc comment, an import with no
output, const and var groups with and without initializers, a raw string,
and a function with short local declarations.
"""
from goc.model import SourceFile
from goc.parser import parse_source

EXAMPLE_SOURCE = '''\
// Package config holds build constants.
package config

import "os"

// Version of the tool.
const Version = "1.2.0"

const (
	MaxRetries = 3
	Name string = `goc`
)

var (
	counter int
	label   string
)

// reset clears state.
func reset() {
	tries := 0
	prefix := "x"
}
'''

EXAMPLE_C = '''\
// Package config holds build constants.
// Version of the tool.
const char * const Version = "1.2.0";
const int MaxRetries = 3;
const char * const Name = "goc";
int counter = 0;
const char * label = "";
// reset clears state.
void reset() {
  int tries = 0;
  const char * prefix = "x";
}
'''


def build_example_file() -> SourceFile:
    return parse_source(EXAMPLE_SOURCE, filename="config.go")

import sys
from dataclasses import dataclass

from rich.pretty import pprint

from argot import *


@dataclass
class Options:
    speedy: bool = False
    consent: bool = True
    cakes: Int32 = 0
    fraction: Float32 = 1.0
    initial: Char = "c"
    name: str = "Cakeman"
    required: Int32 | None = None


options = Options()
parser = Parser()
parser.flag(options, "speedy", "s", "enable-speedy-mode", "This is a flag.")
parser.flag(options, "consent", long="consent", descr="Whether you consent.", default=True)
parser.option(options, "cakes", "n", "num-cakes", "The number of cakes.")
parser.option(options, "fraction", "f", "fraction", "How much of each cake to eat.")
parser.option(options, "initial", "i", "initial", "Initial of the baker.")
parser.option(options, "name", long="cake-name", descr="Name your cake.")
parser.option(options, "required", "r", "required", "This one is mandatory.")


if __name__ == '__main__':
    if not parser.parse(sys.argv, reporter(fancy=True), policy=Policy.ERROR) or options.required is None:
        parser.printhelp("My test program.")
        sys.exit(1)
    pprint(options)

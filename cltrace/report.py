import sys

import colorama


CG = colorama.Fore.GREEN
CR = colorama.Fore.RED
C_ = colorama.Style.RESET_ALL


class Report:
    def __init__(self, out=None, err=None):
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def info(self, msg):
        print(msg, file=self.out)

    def ok(self, msg):
        print("[ {}ok{} ] {}".format(CG, C_, msg), file=self.out)

    def fail(self, msg):
        print("[ {}fail{} ] {}".format(CR, C_, msg), file=self.err)

    def raw_error(self, text):
        # Verbatim, no decoration
        print(text, file=self.err)

__title__ = "expreval"
__version__ = "0.1.0"
__summary__ = "Expreval - compile math formulas into fast evaluable expression trees"
__uri__ = "https://github.com/expreval/expreval"
__author__ = "Expreval Contributors"
__email__ = "maintainers@expreval.dev"
__license__ = "MIT"

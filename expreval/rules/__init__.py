from .compose_binary import ComposeBinaryRule
from .compose_unary import ComposeUnaryRule
from .fold_constants import FoldConstantsRule

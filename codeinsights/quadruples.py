"""
Quadruple Lowering

Maps three-address code 1:1 onto four-field quadruples.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence
import logging

from codeinsights.ir import ThreeAddressCode

logger = logging.getLogger(__name__)


@dataclass
class Quadruple:
    op: str
    arg1: Optional[str]
    arg2: Optional[str]
    result: str

    def to_dict(self) -> Dict[str, Any]:
        return {"op": self.op, "arg1": self.arg1, "arg2": self.arg2, "result": self.result}


class QuadrupleLowering:
    """Lowers TAC to quadruples"""

    def lower(self, instructions: Sequence[ThreeAddressCode]) -> List[Quadruple]:
        quads = [self._lower_one(ins) for ins in instructions]
        logger.debug("lowered %d instructions to quadruples", len(quads))
        return quads

    def _lower_one(self, ins: ThreeAddressCode) -> Quadruple:
        if ins.op == 'if_false':
            # "goto L3" -> target L3 moves into arg2
            target = ins.result
            if target.startswith('goto '):
                target = target[len('goto '):]
            return Quadruple(op='JUMP_FALSE', arg1=ins.arg1, arg2=target.strip(), result='')
        return Quadruple(op=ins.op, arg1=ins.arg1, arg2=ins.arg2, result=ins.result)


def generate_quadruples(instructions: Sequence[ThreeAddressCode]) -> List[Quadruple]:
    """Lower TAC to quadruples"""
    return QuadrupleLowering().lower(instructions)

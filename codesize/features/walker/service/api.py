from typing import Optional

from codesize.core.common.enums import WalkStrategy
from ..domain.interfaces import IFileWalker
from ..data.descriptor_walker import DescriptorFileWalker
from ..data.metadata_walker import MetadataFileWalker
from ..data.posix_ops import PosixOps

def build_walker(strategy: WalkStrategy, ops: Optional[PosixOps] = None) -> IFileWalker:
    """
    Returns the synchronous walker for the requested classification strategy.
    """
    if strategy is WalkStrategy.DESCRIPTOR:
        return DescriptorFileWalker(ops)
    return MetadataFileWalker()

from HJB.Growth.NeoclassicalGrowthModel import (
    NeoclassicalGrowthType,
    init_neoclassical_growth,
)

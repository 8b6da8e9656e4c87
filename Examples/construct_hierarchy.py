import numpy as np
import pandas as pd
from htstree import hts


def construct_hierarchy_from_nodes():
    y = np.random.random((100, 5))
    return hts(y, nodes=[[2], [3, 2]])


def construct_hierarchy_from_characters():
    y = pd.DataFrame(np.random.random((100, 10)),
                     columns=["A10A", "A10B", "A10C", "A20A", "A20B",
                              "B30A", "B30B", "B30C", "B40A", "B40B"])
    return hts(y, characters=[1, 2, 1])


def construct_hierarchy_from_separator():
    y = pd.DataFrame(np.random.random((100, 3)), columns=["VIC_MELB", "VIC_GEEL", "NSW_SYD"])
    return hts(y, separator="_")


if __name__ == '__main__':
    x = construct_hierarchy_from_characters()
    print(x)
    print(x.nodes)
    print(x.gmatrix())
    print(x.inv_s())

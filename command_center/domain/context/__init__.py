# This module handles context engineering for a single directive

# +---------------------+
# |      Memory         |   (Caller-owned, resupplied every call)
# |---------------------|
# | Insights            |
# | Tags                |
# | Strength            |
# +---------------------+

# +---------------------+
# |      Directive      |   (Current input)
# |---------------------|
# | Clauses             |
# | Keywords / stems    |
# | Specificity         |
# +---------------------+

#    \    /
#     \  /
#      \/
# +------------------------------+
# |           Context            |   (Assembled per call)
# |------------------------------|
# | Retrieved memories, ranked   |
# | Reinforced / decayed entries |
# | Normalized clauses           |
# +------------------------------+
#         |
#         v
#   [planner / analyzer / synthesizer]

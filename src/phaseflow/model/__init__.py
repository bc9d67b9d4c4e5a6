"""
The MODEL layer contains pure data structures and business logic.
It has NO knowledge of the GUI (Qt) or the plotting backend (pyqtgraph).
It deals with model definitions, trajectory history and render geometry.
"""

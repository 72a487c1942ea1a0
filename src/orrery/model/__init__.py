"""
The MODEL layer contains pure data structures and scene state.
It has NO knowledge of the GUI (Qt) or the Visualization (PyVista).
It deals with the transform hierarchy, components and tunable parameters.
"""

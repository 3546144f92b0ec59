# keepsake/choreo/__init__.py
from .phases import Phase, PhaseSequence, PhaseSequencer
from .assembly import AssemblyElement, AssemblyAnimator, AssemblyProgress, AssemblyTable, build_table
from .composite import AssemblyPlan, Choreography, ChoreographyPlan

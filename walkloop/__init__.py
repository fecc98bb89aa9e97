"""Walking route generation: closed-loop routes sized to a step, distance or time goal."""

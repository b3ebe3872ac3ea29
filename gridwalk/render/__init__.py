"""Rich and Textual rendering for gridwalk."""

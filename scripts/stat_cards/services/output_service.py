#------------------------------------------------------------
#                     output_service.py
#             Writes rendered SVG cards to disk.

import os
from typing import Dict, List

# This function does save every rendered card into the output directory.
# It returns the written file paths in the order given.
def save_cards(output_dir: str, documents: Dict[str, str]) -> List[str]:
    os.makedirs(output_dir, exist_ok=True)
    written = []
    for filename, content in documents.items():
        path = os.path.join(output_dir, filename)
        with open(path, "w", encoding="utf-8") as file_handle:
            file_handle.write(content)
        written.append(path)
    return written

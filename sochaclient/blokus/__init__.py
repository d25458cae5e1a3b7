"""Game logic for Blokus: shapes, board, moves, scoring and move generation."""
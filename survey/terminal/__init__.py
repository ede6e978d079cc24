"""Terminal key decoding, line editing, cursor control and stream handling."""